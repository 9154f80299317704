from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable failure kinds surfaced by every public operation."""

    UNKNOWN_KEY = "UnknownKey"
    TYPE_MISMATCH = "TypeMismatch"
    VALUE_REJECTED = "ValueRejected"
    MISSING_REQUIRED_KEY = "MissingRequiredKey"
    CROSS_FIELD_VIOLATION = "CrossFieldViolation"
    DICTIONARY_READ_ERROR = "DictionaryReadError"
    INSUFFICIENT_WORDS = "InsufficientWords"
    RANDOM_SOURCE_ERROR = "RandomSourceError"
    RANDOM_SOURCE_EXHAUSTED = "RandomSourceExhausted"
    INVALID_ARGUMENT = "InvalidArgument"

    def __repr__(self) -> str:
        """Provide a clean representation for debugging."""
        return f"ErrorKind.{self.name}"


class KeyShape(Enum):
    """Expected container shape of a configuration value."""

    SCALAR = "scalar"  # str, int or path-like
    CHAR_LIST = "char_list"  # list of single characters
    SUBSTITUTION_MAP = "substitution_map"  # dict of char -> replacement
    RANDOM_FN = "random_fn"  # callable random source

    def __repr__(self) -> str:
        """Provide a clean representation for debugging."""
        return f"KeyShape.{self.name}"


class PaddingType(Enum):
    """Symbol padding strategies applied around the word sequence."""

    NONE = "NONE"  # No symbol padding
    FIXED = "FIXED"  # Explicit counts before and after
    ADAPTIVE = "ADAPTIVE"  # Pad out to a total target length

    def __repr__(self) -> str:
        """Provide a clean representation for debugging."""
        return f"PaddingType.{self.name}"


class CaseTransform(Enum):
    """Case transformations applied to each word."""

    NONE = "NONE"
    UPPER = "UPPER"
    LOWER = "LOWER"
    CAPITALISE = "CAPITALISE"
    INVERSE = "INVERSE"
    RANDOM = "RANDOM"

    def __repr__(self) -> str:
        """Provide a clean representation for debugging."""
        return f"CaseTransform.{self.name}"


class SeparatorMode(Enum):
    """Special values accepted by separator_character."""

    NONE = "NONE"  # Words are joined with nothing between them
    RANDOM = "RANDOM"  # A symbol is drawn from symbol_alphabet

    def __repr__(self) -> str:
        """Provide a clean representation for debugging."""
        return f"SeparatorMode.{self.name}"


class PaddingCharacterMode(Enum):
    """Special values accepted by padding_character."""

    NONE = "NONE"
    RANDOM = "RANDOM"
    SEPARATOR = "SEPARATOR"  # Reuse whatever separator was chosen

    def __repr__(self) -> str:
        """Provide a clean representation for debugging."""
        return f"PaddingCharacterMode.{self.name}"


# Log format templates with predefined options
class LogFormatTemplate(Enum):
    """Standard logging format templates."""

    SIMPLE = "%(message)s"
    STANDARD = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    DETAILED = (
        "%(asctime)s - %(name)s - %(levelname)s - %(pathname)s:%(lineno)d - %(message)s"
    )

    def __repr__(self) -> str:
        """Provide a clean representation for debugging."""
        return f"LogFormatTemplate.{self.name}"


# Log output destinations
class LogDestination(Enum):
    """Logging output destinations."""

    CONSOLE = "console"  # Log to console only
    FILE = "file"  # Log to file only
    BOTH = "both"  # Log to both console and file

    def __repr__(self) -> str:
        """Provide a clean representation for debugging."""
        return f"LogDestination.{self.name}"
