"""
FastAPI server for quaycheck

Provides the read-only REST API over live Docker port occupancy.
Build an app with quaycheck.api.app.create_app().
"""
