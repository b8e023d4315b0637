"""FastAPI application for managing QR codes and their scan events."""
