MAJOR = 1
MINOR = 1
PATCH = 1

__version__ = f"{MAJOR}.{MINOR}.{PATCH}"

USER_AGENT = f"Clockwork Python wrapper/{__version__}"
