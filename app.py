"""
FastAPI web application for the Apple Music request explorer
Provides REST API endpoints for listing and running catalog requests.
"""

from pydantic import BaseModel
from config.settings import Settings
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from typing import Dict
from fastapi.middleware.cors import CORSMiddleware

from asapplemusic import __version__
from asapplemusic.api.apple_music_client import AppleMusicClient
from asapplemusic.api.base_client import AppleMusicError
from asapplemusic.explorer import (
    list_requests, missing_params, make_call, serialize_result, get_request_type, UnknownRequestError
)
from asapplemusic.utils.validators import ValidationError

app = FastAPI(
    title="Apple Music Explorer API",
    description="Run Apple Music catalog, search and library requests by name",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize settings
settings = Settings()

class CallRequest(BaseModel):
    params: Dict[str, str] = {}

def create_client() -> AppleMusicClient:
    return AppleMusicClient(settings=settings)

@app.get("/")
async def root():
    return {"message": "Apple Music Explorer API", "version": __version__}

@app.get("/health")
async def health_check():
    return {"status": "healthy", "developer_token_source": settings.developer_token_source}

@app.get("/requests")
async def get_requests():
    """List the available requests and their parameters."""
    return {"requests": [request_type.to_dict() for request_type in list_requests()]}

@app.post("/requests/{call_type}")
async def run_request(call_type: str, request: CallRequest):
    """Run one request; API errors are returned with their own status."""
    try:
        get_request_type(call_type)
    except UnknownRequestError as e:
        raise HTTPException(status_code=404, detail=str(e))

    missing = missing_params(call_type, request.params)
    if missing:
        raise HTTPException(status_code=422, detail={"missing": missing})

    try:
        async with create_client() as client:
            result = await make_call(client, call_type, request.params)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AppleMusicError as e:
        status_code = e.error.status_code or 500
        if not 400 <= status_code < 600:
            status_code = 502
        return JSONResponse(status_code=status_code, content={"errors": [e.error.to_dict()]})

    return {"result": serialize_result(result)}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
