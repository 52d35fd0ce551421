"""
Domain layer for the asset lifecycle engine.
Contains the maintenance scheduling, maintenance record and issue workflows,
separated from data persistence concerns.
"""
