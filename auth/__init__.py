"""auth/ -- Credential Store and Token Service for the player auction.

Layer rule: auth/ imports only stdlib, third-party libraries and core/.
It does NOT import from api/ or auction/.
api/ imports from auth/, not the other way around.
"""
