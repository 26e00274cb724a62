"""Registration property keys and engine defaults."""

CONTEXT = "access.context"
PATH = "path"
OPERATIONS = "operations"
FINALOPERATIONS = "finaloperations"
SERVICE_RANKING = "service.ranking"

DEFAULT_PATH_PATTERN = ".*"
DEFAULT_GATE_TIMEOUT = 5.0
DEFAULT_CONFIG_FILE = "accessgate.yaml"
