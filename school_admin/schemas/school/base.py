from pydantic import BaseModel, ConfigDict

class SchoolInDB(BaseModel):
    id: str
    name: str
    address: str
    contact_info: str

    model_config = ConfigDict(from_attributes=True)

class ClassInDB(BaseModel):
    id: str
    name: str
    teacher_id: str
    school_id: str

    model_config = ConfigDict(from_attributes=True)
