from pydantic import BaseModel, ConfigDict


class UserSummary(BaseModel):
    """Краткие данные владельца записи"""
    id: int
    name: str
    username: str

    model_config = ConfigDict(from_attributes=True)


class MetadataResponse(BaseModel):
    """Метаданные постраничной выборки"""
    current_page: int
    page_size: int
    total_pages: int
    total_records: int

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str


class UserEnvelope(BaseModel):
    user: UserSummary
