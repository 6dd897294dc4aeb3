"""ABAP domain types and enumerations."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from ..errors import ConfigurationError


class Command(str, Enum):
    """CLI commands."""

    CALL = "call"
    GET = "get"
    MAKE = "make"
    SET = "cp"
    RESET = "rm"

    @property
    def needs_backend(self) -> bool:
        """True when the command reads live metadata from the ABAP system."""
        return self in (Command.CALL, Command.GET)

    @property
    def renders(self) -> bool:
        return self in (Command.CALL, Command.GET, Command.MAKE)


class ParameterClass(str, Enum):
    """Function module parameter class (PARAMCLASS in RFC_GET_FUNCTION_INTERFACE)."""

    IMPORT = "I"
    EXPORT = "E"
    CHANGING = "C"
    TABLES = "T"
    EXCEPTION = "X"

    @property
    def label(self) -> str:
        return self.name.lower()


class ParameterKind(str, Enum):
    """Shape of a parameter, resolved once from the raw interface row."""

    SCALAR = "scalar"
    STRUCTURE = "structure"
    TABLE = "table"
    EXCEPTION = "exception"


class AbapType(str, Enum):
    """ABAP dictionary data types."""

    CHAR = "CHAR"       # Character
    NUMC = "NUMC"       # Numeric character
    DATS = "DATS"       # Date (YYYYMMDD)
    TIMS = "TIMS"       # Time (HHMMSS)
    DEC = "DEC"         # Packed number
    CURR = "CURR"       # Currency field
    QUAN = "QUAN"       # Quantity field
    CUKY = "CUKY"       # Currency key
    UNIT = "UNIT"       # Unit of measure
    LANG = "LANG"       # Language key
    CLNT = "CLNT"       # Client
    ACCP = "ACCP"       # Posting period
    PREC = "PREC"       # Precision
    INT1 = "INT1"
    INT2 = "INT2"
    INT4 = "INT4"
    INT8 = "INT8"
    FLTP = "FLTP"       # Floating point
    STRG = "STRG"       # String
    RSTR = "RSTR"       # Byte string
    RAW = "RAW"
    SSTR = "SSTR"       # Short string
    D16D = "D16D"       # Decimal floating point, 16 digits
    D34D = "D34D"       # Decimal floating point, 34 digits
    STRU = "STRU"       # Structure
    TTYP = "TTYP"       # Table type
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: Optional[str]) -> "AbapType":
        """Return the matching type, UNKNOWN when the value is not recognized."""
        try:
            return cls(str(value or "").strip().upper())
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_integer(self) -> bool:
        return self in (AbapType.INT1, AbapType.INT2, AbapType.INT4, AbapType.INT8)

    @property
    def is_decimal(self) -> bool:
        return self in (
            AbapType.DEC,
            AbapType.CURR,
            AbapType.QUAN,
            AbapType.PREC,
            AbapType.D16D,
            AbapType.D34D,
        )

    @property
    def is_nested(self) -> bool:
        return self in (AbapType.STRU, AbapType.TTYP)


class UIFramework(str, Enum):
    """UI frameworks supported by the make command."""

    UI5 = "ui5"
    FUNDAMENTAL_NGX = "fundamental-ngx"
    UI5_REACT = "ui5-react"

    @classmethod
    def parse(cls, value: str) -> "UIFramework":
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ConfigurationError(
                f"UI framework not supported: {value} "
                f"(supported: {', '.join(ui.value for ui in cls)})"
            )


# Locale code -> one character SAP language key (SPRAS)
LANGUAGES: Dict[str, str] = {
    "ar": "A",
    "bg": "W",
    "ca": "c",
    "cs": "C",
    "da": "K",
    "de": "D",
    "el": "G",
    "en": "E",
    "es": "S",
    "et": "9",
    "fi": "U",
    "fr": "F",
    "he": "B",
    "hr": "6",
    "hu": "H",
    "it": "I",
    "ja": "J",
    "ko": "3",
    "lt": "X",
    "lv": "Y",
    "nl": "N",
    "no": "O",
    "pl": "L",
    "pt": "P",
    "ro": "4",
    "ru": "R",
    "sh": "0",
    "sk": "Q",
    "sl": "5",
    "sv": "V",
    "th": "2",
    "tr": "T",
    "uk": "8",
    "zf": "M",
    "zh": "1",
}


def sap_language(locale: str) -> str:
    """Map a locale code to the SAP language key, rejecting unsupported ones."""
    try:
        return LANGUAGES[locale.lower()]
    except (KeyError, AttributeError):
        raise ConfigurationError(f"Language not supported: {locale}")


# RFC internal type (EXID) -> dictionary type
EXID_TYPES: Dict[str, AbapType] = {
    "C": AbapType.CHAR,
    "N": AbapType.NUMC,
    "D": AbapType.DATS,
    "T": AbapType.TIMS,
    "P": AbapType.DEC,
    "X": AbapType.RAW,
    "b": AbapType.INT1,
    "s": AbapType.INT2,
    "I": AbapType.INT4,
    "8": AbapType.INT8,
    "F": AbapType.FLTP,
    "g": AbapType.STRG,
    "y": AbapType.RSTR,
    "a": AbapType.D16D,
    "e": AbapType.D34D,
    "u": AbapType.STRU,
    "v": AbapType.STRU,
    "h": AbapType.TTYP,
}


def initial_value(abap_type: AbapType):
    """Python initial value for a field of the given type, as sent over RFC."""
    if abap_type.is_integer:
        return 0
    if abap_type == AbapType.FLTP:
        return 0.0
    if abap_type.is_decimal:
        return "0"
    if abap_type == AbapType.STRU:
        return {}
    if abap_type == AbapType.TTYP:
        return []
    return ""
