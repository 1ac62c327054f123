"""
Remote Backend Module

GraphQL transport to the backend that owns users, areas, universities,
the booking dashboard and bookings themselves.

Key Components:
- client.py: async GraphQL client and response parsing
- queries.py: query and mutation documents
- errors.py: BackendError raised on transport or GraphQL failures
"""
