"""Final acceptance gate for render templates."""

import logging
from typing import Any

from ..errors import TemplateStructureError
from ..models.template import TEMPLATE_KEYS

logger = logging.getLogger(__name__)

# Vertical (9:16) output
TEMPLATE_WIDTH = 1080
TEMPLATE_HEIGHT = 1920


def validate_template_structure(document: Any) -> None:
    """Check the serialized template the renderer will receive.

    Raises:
        TemplateStructureError: On the first missing key, wrong dimension or
            malformed element list.
    """
    if not isinstance(document, dict):
        raise TemplateStructureError("template", "a JSON object", type(document).__name__)

    for key in TEMPLATE_KEYS:
        value = document.get(key)
        if value is None or value == "":
            raise TemplateStructureError(key, "a value", value)

    if document["width"] != TEMPLATE_WIDTH:
        raise TemplateStructureError("width", TEMPLATE_WIDTH, document["width"])
    if document["height"] != TEMPLATE_HEIGHT:
        raise TemplateStructureError("height", TEMPLATE_HEIGHT, document["height"])

    if not isinstance(document["elements"], list):
        raise TemplateStructureError("elements", "an array", type(document["elements"]).__name__)

    logger.info("Template structure validation passed")
