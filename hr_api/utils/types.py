from typing import Literal

# Literal restricts the accepted values
EntityName = Literal["department", "employee"]
ValidationMode = Literal["create", "update"]
