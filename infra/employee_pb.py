"""betterproto message definitions for the employee dataset.

Equivalent ``employee.proto``::

    syntax = "proto3";

    message Employee {
      int32 id = 1;
      string name = 2;
      double salary = 3;
      string email = 4;
      bool is_manager = 5;
    }

    message Employees {
      repeated Employee employee = 1;
    }
"""

from dataclasses import dataclass
from typing import List

import betterproto


@dataclass(eq=False, repr=False)
class Employee(betterproto.Message):
    id: int = betterproto.int32_field(1)
    name: str = betterproto.string_field(2)
    salary: float = betterproto.double_field(3)
    email: str = betterproto.string_field(4)
    is_manager: bool = betterproto.bool_field(5)


@dataclass(eq=False, repr=False)
class Employees(betterproto.Message):
    employee: List["Employee"] = betterproto.message_field(1)
