"""v1 router package — all /api/v1/* endpoints live here.

Files:
  contracts.py             — contract lifecycle (create/edit/cancel/close/hold/extend/delete)
  contract_statuses.py     — contract status lookup listing
  vehicle_status_syncs.py  — pending vehicle status writes + retry

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to app/services/.
"""
