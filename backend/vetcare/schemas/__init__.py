"""Module: schemas.

Wire models shared by the API routes and the Python client.
"""
