name = "pgrails"
label = "PgRails"
__version__ = "0.3.0"


def version_label() -> str:
    return f"{label} {__version__}"
