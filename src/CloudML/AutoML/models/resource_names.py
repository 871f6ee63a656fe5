# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Resource-name templates for AutoML entities.

Every entity is addressed by a hierarchical name such as
``projects/{project}/locations/{location}/datasets/{dataset}``. The templates
are part of the wire contract and must match the service verbatim.

Each template has a builder (``dataset_path(...)``), a parser
(``parse_dataset_path(name)``, returning ``{}`` when the name does not match),
and a validator (``validate_dataset_name(name)``, raising
:class:`~CloudML.AutoML.core.errors.ValidationError`).
"""

from __future__ import annotations

import re
from typing import Dict, Pattern, Tuple

from ..core.errors import ValidationError

LOCATION_TEMPLATE = "projects/{project}/locations/{location}"
DATASET_TEMPLATE = "projects/{project}/locations/{location}/datasets/{dataset}"
ANNOTATION_SPEC_TEMPLATE = (
    "projects/{project}/locations/{location}/datasets/{dataset}/annotationSpecs/{annotation_spec}"
)
MODEL_TEMPLATE = "projects/{project}/locations/{location}/models/{model}"
MODEL_EVALUATION_TEMPLATE = (
    "projects/{project}/locations/{location}/models/{model}/modelEvaluations/{model_evaluation}"
)
OPERATION_TEMPLATE = "projects/{project}/locations/{location}/operations/{operation}"

_FIELD_RE = re.compile(r"{(\w+)}")


def _compile(template: str) -> Tuple[Pattern[str], Tuple[str, ...]]:
    fields = tuple(_FIELD_RE.findall(template))
    pattern = "^" + _FIELD_RE.sub(lambda m: f"(?P<{m.group(1)}>[^/]+)", template) + "$"
    return re.compile(pattern), fields


_TEMPLATES: Dict[str, Tuple[str, Pattern[str], Tuple[str, ...]]] = {
    kind: (template, *_compile(template))
    for kind, template in (
        ("location", LOCATION_TEMPLATE),
        ("dataset", DATASET_TEMPLATE),
        ("annotation_spec", ANNOTATION_SPEC_TEMPLATE),
        ("model", MODEL_TEMPLATE),
        ("model_evaluation", MODEL_EVALUATION_TEMPLATE),
        ("operation", OPERATION_TEMPLATE),
    )
}


def _build(kind: str, **components: str) -> str:
    template, _, fields = _TEMPLATES[kind]
    for name in fields:
        value = components.get(name)
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(
                f"{kind} name requires a non-empty '{name}'",
                details={"resource": kind, "component": name},
            )
        if "/" in value:
            raise ValidationError(
                f"'{name}' must not contain '/': {value!r}",
                details={"resource": kind, "component": name},
            )
    return template.format(**{name: components[name] for name in fields})


def _parse(kind: str, name: str) -> Dict[str, str]:
    _, pattern, _ = _TEMPLATES[kind]
    if not isinstance(name, str):
        return {}
    m = pattern.match(name)
    return m.groupdict() if m else {}


def _validate(kind: str, name: str) -> str:
    if not _parse(kind, name):
        template = _TEMPLATES[kind][0]
        raise ValidationError(
            f"Invalid {kind} name {name!r}; expected '{template}'",
            details={"resource": kind, "name": name},
        )
    return name


# ----------------------------------------------------------------- builders


def location_path(project: str, location: str) -> str:
    """Return a fully-qualified location string."""
    return _build("location", project=project, location=location)


def dataset_path(project: str, location: str, dataset: str) -> str:
    """Return a fully-qualified dataset string."""
    return _build("dataset", project=project, location=location, dataset=dataset)


def annotation_spec_path(project: str, location: str, dataset: str, annotation_spec: str) -> str:
    """Return a fully-qualified annotation spec string."""
    return _build(
        "annotation_spec",
        project=project,
        location=location,
        dataset=dataset,
        annotation_spec=annotation_spec,
    )


def model_path(project: str, location: str, model: str) -> str:
    """Return a fully-qualified model string."""
    return _build("model", project=project, location=location, model=model)


def model_evaluation_path(project: str, location: str, model: str, model_evaluation: str) -> str:
    """Return a fully-qualified model evaluation string."""
    return _build(
        "model_evaluation",
        project=project,
        location=location,
        model=model,
        model_evaluation=model_evaluation,
    )


def operation_path(project: str, location: str, operation: str) -> str:
    """Return a fully-qualified operation string."""
    return _build("operation", project=project, location=location, operation=operation)


# ------------------------------------------------------------------ parsers


def parse_location_path(name: str) -> Dict[str, str]:
    """Parse a location path into its component segments."""
    return _parse("location", name)


def parse_dataset_path(name: str) -> Dict[str, str]:
    """Parse a dataset path into its component segments."""
    return _parse("dataset", name)


def parse_annotation_spec_path(name: str) -> Dict[str, str]:
    """Parse an annotation spec path into its component segments."""
    return _parse("annotation_spec", name)


def parse_model_path(name: str) -> Dict[str, str]:
    """Parse a model path into its component segments."""
    return _parse("model", name)


def parse_model_evaluation_path(name: str) -> Dict[str, str]:
    """Parse a model evaluation path into its component segments."""
    return _parse("model_evaluation", name)


def parse_operation_path(name: str) -> Dict[str, str]:
    """Parse an operation path into its component segments."""
    return _parse("operation", name)


# --------------------------------------------------------------- validators


def validate_location_name(name: str) -> str:
    return _validate("location", name)


def validate_dataset_name(name: str) -> str:
    return _validate("dataset", name)


def validate_annotation_spec_name(name: str) -> str:
    return _validate("annotation_spec", name)


def validate_model_name(name: str) -> str:
    return _validate("model", name)


def validate_model_evaluation_name(name: str) -> str:
    return _validate("model_evaluation", name)


def validate_operation_name(name: str) -> str:
    return _validate("operation", name)


def resource_id(name: str) -> str:
    """Return the last segment of a resource name (e.g. the model id)."""
    return name.rsplit("/", 1)[-1]


__all__ = [
    "location_path",
    "dataset_path",
    "annotation_spec_path",
    "model_path",
    "model_evaluation_path",
    "operation_path",
    "parse_location_path",
    "parse_dataset_path",
    "parse_annotation_spec_path",
    "parse_model_path",
    "parse_model_evaluation_path",
    "parse_operation_path",
    "validate_location_name",
    "validate_dataset_name",
    "validate_annotation_spec_name",
    "validate_model_name",
    "validate_model_evaluation_name",
    "validate_operation_name",
    "resource_id",
]
