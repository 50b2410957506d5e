"""
Web module: FastAPI application exposing a comparison session.
"""
