#!/usr/bin/env python3
"""
Run script for the pdfcast API
"""
import uvicorn

from pdfcast.config.settings import settings
from pdfcast.main import app

if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port, reload=settings.debug)
