from .base_model import base_model
from .enum import enum
from ..json_schema import singleton_enum_schema as json_schema
