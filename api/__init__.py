"""
SMS Verifier HTTP API (FastAPI)

- POST /api/v1/sms/verify - Verify one signed SMS
- POST /api/v1/sms/verify/simple - Verify one signed SMS, boolean result
- POST /api/v1/sms/verify/bulk - Verify an NDJSON stream of signed SMS
- GET /api/v1/sms/health - Health check
- GET /api/v1/sms/info - Service information

Usage:
    uvicorn api.app:app --port 8081
"""

__version__ = "1.0.0"
