"""
Constrained string types shared by the request models.
"""

from typing import Annotated

from pydantic import StringConstraints


def text(max_length: int = 255, min_length: int = 1):
    """
    Required text field: surrounding whitespace is stripped and the result
    must hold between min_length and max_length characters.
    """
    return Annotated[
        str,
        StringConstraints(
            strip_whitespace=True, min_length=min_length, max_length=max_length
        ),
    ]


# Optional text columns only carry a length limit
def optional_text(max_length: int = 50):
    """Text field that may be empty; only the length is limited."""
    return Annotated[str, StringConstraints(max_length=max_length)]


NotBlank = text()
ShortText = text(50)
PersonName = text(50, min_length=3)
PostalCode = text(10, min_length=5)
CityName = text(50, min_length=3)
PhoneNumber = text(50, min_length=4)
Password = Annotated[str, StringConstraints(min_length=4)]
SpecText = optional_text(50)
