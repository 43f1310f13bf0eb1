# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

import asyncio
import logging
from typing import Annotated

from fieldguard import (
    Length,
    NonZero,
    Pattern,
    Required,
    ValidationFailure,
    validatable,
    validated,
)

# Basic logging setup (timing lines are emitted at INFO)
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


class AuditFields:
    # Public fields on a base class are validated for subclasses too.
    operator: Annotated[str, Required(message="operator is mandatory")]


@validatable
class SignupForm(AuditFields):
    name: Annotated[str, Required(), Length(min=2, max=32)]
    country: Annotated[str, Pattern(r"^[A-Z]{3}$")]
    age: Annotated[str, NonZero()]
    note: str  # no constraints, never read

    def __init__(self, name, country, age, operator="web", note=""):
        self.name = name
        self.country = country
        self.age = age
        self.operator = operator
        self.note = note


# 1. Default: raises ValidationFailure
@validated
def signup(form: SignupForm):
    return f"welcome {form.name}"


# 2. Contextual handler: map the failure to a response payload
@validated(on_reject=lambda error: {"status": 400, "error": error.to_dict()})
async def signup_api(form: SignupForm):
    await asyncio.sleep(0.01)
    return {"status": 201, "name": form.name}


async def main():
    print("\nsignup(valid form)... (should PASS)")
    print("  ->", signup(SignupForm("Ada", "GBR", "36")))

    print("\nsignup(name='')... (should be REJECTED on name)")
    try:
        signup(SignupForm("", "GBR", "0"))
    except ValidationFailure as e:
        print(f"  -> rejected [{e.code.value}]: {e.description}")

    print("\nsignup_api(country='gbr')... (should return a 400 payload)")
    print("  ->", await signup_api(SignupForm("Ada", "gbr", "36")))

    print("\nsignup_api(operator='')... (inherited field, should return a 400 payload)")
    print("  ->", await signup_api(SignupForm("Ada", "GBR", "36", operator="")))


if __name__ == "__main__":
    asyncio.run(main())
