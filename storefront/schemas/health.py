from pydantic import BaseModel


class HealthResponse(BaseModel):
    version: str
    build_date: str
    service_name: str
