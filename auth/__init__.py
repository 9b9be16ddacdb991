"""auth/ -- Session state and login backends for loginflow.

Layer rule: auth/ imports from core/ and third-party libraries only.
It does NOT import from api/. api/ and main.py import from auth/,
not the other way around.
"""
