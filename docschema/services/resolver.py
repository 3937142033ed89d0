"""
resolver.py

Applies a template selection to the user's current field tree.

Two strategies:
- replace: the template's fields become the whole tree
- merge:   template fields are appended unless a top-level field with the
           same name already exists (existing fields always win)
"""

import logging
from typing import Iterable

from docschema.schemas.fields import FieldNode, FieldTree, ensure_tree
from docschema.services.templates import CUSTOM_TEMPLATE, get_template

logger = logging.getLogger(__name__)


def merge_fields(current: Iterable[FieldNode], incoming: Iterable[FieldNode]) -> FieldTree:
    """
    Append every field of `incoming` whose name is not already taken.

    Existing fields keep their position and attributes; new fields are
    appended in their own order. The first field with a given name wins,
    which also applies to duplicates inside `incoming`.
    """
    merged = list(current)
    taken = {field.name for field in merged}

    for field in incoming:
        if field.name in taken:
            continue
        merged.append(field)
        taken.add(field.name)

    return merged


def resolve(current_tree: Iterable, template_key: str, merge_requested: bool) -> FieldTree:
    """
    Produce the field tree that results from picking a template.

    Parameters:
    - current_tree: the user's fields (models or plain dicts)
    - template_key: key from the template catalog
    - merge_requested: merge into the current tree instead of replacing it

    Returns:
    - a new list; `current_tree` is never modified

    Raises:
    - UnknownTemplate when `template_key` is not in the catalog
    """
    current = ensure_tree(current_tree)

    if template_key == CUSTOM_TEMPLATE:
        return current

    template = get_template(template_key)

    if not merge_requested:
        logger.info(f"Replacing {len(current)} fields with template '{template_key}'")
        return template

    merged = merge_fields(current, template)
    logger.info(
        f"Merged template '{template_key}': "
        f"{len(merged) - len(current)} of {len(template)} fields added"
    )
    return merged
