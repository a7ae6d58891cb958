from pydantic import BaseModel


class GeoPointIn(BaseModel):
    latitude: float
    longitude: float
