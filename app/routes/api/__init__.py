"""
API routes package for the auction application.

Contains all API endpoints organized by functionality:
- auth: operator login/logout
- auction: live auction operations and the transient bid
- teams, players: setup before the auction starts
- results: export of final squads
"""
