import os
import re
from typing import Any, Dict, Optional

import yaml

from stepf_deploy.exceptions import ServiceFileError
from stepf_deploy.helpers.logger import setup_logging

logger = setup_logging()

SERVICE_FILE_NAMES = ("serverless.yml", "serverless.yaml")
STEP_FUNCTIONS_KEY = "stepFunctions"

TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"
BOOL_TAG = "tag:yaml.org,2002:bool"


class ServiceFileLoader(yaml.SafeLoader):
    """
    SafeLoader that keeps timestamps and the YAML 1.1 yes/no/on/off words as strings.
    Only true/false resolve to booleans.
    """


ServiceFileLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in (TIMESTAMP_TAG, BOOL_TAG)]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
ServiceFileLoader.add_implicit_resolver(
    BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


class ServiceFileHandler:
    """
    Reads the service file (serverless.yml or serverless.yaml) from the project root
    and exposes its stepFunctions section.
    """

    def __init__(self, service_path: Optional[str] = None):
        """
        :param service_path: Project root holding the service file. None means the
                             command runs outside a service and nothing is loaded.
        """
        self.service_path = service_path

    def resolve_path(self) -> Optional[str]:
        """
        Pick the service file path. The first existing name wins; when none exists
        the last candidate is returned so that loading it reports the missing file.

        :return: Path of the service file, or None without a service path.
        """
        if not self.service_path:
            return None

        for file_name in SERVICE_FILE_NAMES:
            candidate = os.path.join(self.service_path, file_name)
            if os.path.exists(candidate):
                return candidate
        return os.path.join(self.service_path, SERVICE_FILE_NAMES[-1])

    def load(self) -> Dict[str, Any]:
        """
        Parse the service file.

        :return: The parsed document, {} for an empty file or without a service path.
        :raises FileNotFoundError: If no service file exists in the service path.
        :raises yaml.YAMLError: If the file is not valid YAML.
        :raises ServiceFileError: If the document is not a mapping.
        """
        path = self.resolve_path()
        if path is None:
            logger.info("No service path set, skipping service file")
            return {}

        with open(path, "r") as f:
            data = yaml.load(f, Loader=ServiceFileLoader)

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ServiceFileError(f"Invalid service file format in {path}: expected a mapping.")

        logger.debug(f"Loaded service file {path}")
        return data

    def get_step_functions(self) -> Optional[Dict[str, Any]]:
        """
        :return: The stepFunctions mapping (name -> definition), or None when absent.
        """
        step_functions = self.load().get(STEP_FUNCTIONS_KEY)
        if step_functions is None:
            return None
        if not isinstance(step_functions, dict):
            raise ServiceFileError(f"'{STEP_FUNCTIONS_KEY}' must map state machine names to definitions.")
        return step_functions
