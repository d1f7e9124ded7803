"""Pydantic schemas package.

Folder intent:
  common.py        — CamelModel (requests), OrmModel (responses), HealthResponse
  contract.py      — contract request DTOs, ContractOut and response envelopes
  lookup.py        — contract / vehicle status lookups
  vehicle_sync.py  — pending vehicle status writes
"""
