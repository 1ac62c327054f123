"""
Authentication Module

Login and registration are proxied to the backend, which issues the JWT.
Requests carry that token; it is decoded into an explicit UserSession
that is passed to the services needing the current user.
"""
