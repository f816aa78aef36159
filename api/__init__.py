"""
Employee Notes API (FastAPI)

HTTP API for the employee notes service:
- GET /api/import-export/export - Download dataset (json) or archive (zip)
- POST /api/import-export/import - Replace dataset from an upload
- /api/employees - Employee records, notes, praise, feedback, reviews
- /api/files - Supporting document upload and download
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "2.0.0"
