from __future__ import annotations


def base_model(
    enum_cls: type,
    *,
    model_name: str | None = None,
    field_name: str = "value",
    description: str | None = None,
) -> type["BaseModel"]:
    """
    Create a pydantic BaseModel with a single field of type enum_cls.

        CityModel = City.base_model()
        CityModel(value=42).value is City.NEW_YORK   # True
        CityModel(value=City.PILSEN).model_dump()    # {"value": True}
    """
    from pydantic import BaseModel, create_model, Field
    default = Field(..., description=description) if description else ...

    return create_model(
        model_name or f"{enum_cls.__name__}Model",
        **{field_name: (enum_cls, default)},
    )
