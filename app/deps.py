# app/deps.py

from fastapi import HTTPException

from app.config import settings


# Diagnostic routes answer 404 while their flag is off
def require_debug():
    if not settings.debug_enabled:
        raise HTTPException(status_code=404, detail="Not Found")


def require_db_test():
    if not settings.ENABLE_DB_TEST:
        raise HTTPException(status_code=404, detail="Not Found")
