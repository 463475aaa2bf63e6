"""auth/ -- Credential hashing, bearer tokens and user persistence for Chirpy.

Layer rule: auth/ imports only stdlib + third-party libraries, except
auth/dependencies.py which reads core.config for the token secret.
It does NOT import from api/ or chirps/.
api/ imports from auth/, not the other way around.
"""
