"""Employee example dataset and its declared schema.

The benchmark accepts any structured value; this module supplies the
concrete shape used by the command-line runner, the example, and the
tests: ``{"employee": [ {id, name, salary, email, is_manager}, ... ]}``.

``EmployeeList`` doubles as the schema for:
    - Strict validation in :class:`infra.protobuf_adapter.ProtobufAdapter`
      (wrong types, unknown fields, int32 overflow).
    - Lax, schema-aware round-trip equality in
      :func:`core.equality.values_equal`.

Example:
    >>> dataset = build_sample_dataset()
    >>> len(dataset["employee"])
    3
    >>> EmployeeList.model_validate(dataset).employee[1].name
    'Fatima'
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

INT32_MIN: int = -(2**31)
INT32_MAX: int = 2**31 - 1


class Employee(BaseModel):
    """One employee record.

    Attributes:
        id: Employee identifier. Unique within a dataset by convention;
            not enforced here. Must fit in a signed 32-bit integer.
        name: Display name.
        salary: Salary amount.
        email: Contact email.
        is_manager: Whether the employee manages others.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: int = Field(ge=INT32_MIN, le=INT32_MAX, description="Employee id (int32)")
    name: str = Field(description="Employee name")
    salary: float = Field(description="Salary amount")
    email: str = Field(description="Contact email")
    is_manager: bool = Field(description="Manager flag")


class EmployeeList(BaseModel):
    """Top-level dataset: ``{"employee": [...]}``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    employee: list[Employee] = Field(
        default_factory=list,
        description="Employee records in dataset order",
    )


def build_sample_dataset() -> dict[str, Any]:
    """Return the three-employee sample dataset as plain Python values."""
    return {
        "employee": [
            {
                "id": 1,
                "name": "Ahmed",
                "salary": 12000,
                "email": "ahmed@entreprise.ma",
                "is_manager": False,
            },
            {
                "id": 2,
                "name": "Fatima",
                "salary": 25000,
                "email": "fatima@entreprise.ma",
                "is_manager": True,
            },
            {
                "id": 3,
                "name": "Youssef",
                "salary": 28000,
                "email": "youssef@entreprise.ma",
                "is_manager": True,
            },
        ],
    }
