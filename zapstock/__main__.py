"""Run the service with uvicorn: ``python -m zapstock``."""

import uvicorn

from zapstock.core_settings import get_settings

def main():
    settings = get_settings()
    uvicorn.run("zapstock.main:app", host=settings.HOST, port=settings.PORT)

if __name__ == "__main__":
    main()
