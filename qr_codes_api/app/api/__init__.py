"""
API package containing versioned routes.

A version subpackage exposes a top-level ``router`` which is mounted by
``main.create_app`` under ``/api/<version>``.
"""
