from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel


class Status(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    CLONING = "cloning"
    SUCCESS = "success"
    ERROR = "error"


class StatusView(BaseModel):
    icon: str
    icon_class: str
    spin: bool = False
    text: str
    class_name: str


class ButtonView(BaseModel):
    label: str
    spin: bool = False
    disabled: bool = False


class FormState(BaseModel):
    form_id: str
    status: Status
    message: str = ""
    field_error: Optional[str] = None
    is_loading: bool = False
    history: List[Status]
    view: Optional[StatusView] = None
    button: ButtonView


class FieldErrorOut(BaseModel):
    detail: str
    field_errors: Dict[str, str]
