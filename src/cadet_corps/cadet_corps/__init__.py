"""Cadet Corps administration package.

This package is organized by feature modules (attendance, sessions, cadets, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
