"""Application package for the university course-management backend.

This package exposes the service, repository and model modules used by
the FastAPI application (`academia.main:app`); HTTP handlers live in
`academia.resources`. Individual modules contain the concrete
implementations and documentation.
"""
