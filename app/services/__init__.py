"""Services package — all business logic lives here, never in routers.

Files:
  contract.py         — contract lifecycle transitions (create/edit/cancel/close/hold/extend/delete)
  contract_rules.py   — pure rules: contract numbers, required fields, extension arithmetic
  status_resolver.py  — status name -> lookup id resolution
  vehicle_sync.py     — best-effort vehicle status writes + retry of failed ones

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. No FastAPI imports in services.
"""
