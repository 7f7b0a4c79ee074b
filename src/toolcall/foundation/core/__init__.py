"""Core tool abstractions: metadata, signatures, tools and the invocation engine."""

from .invoke import InvocationOutcome, OutcomeKind, coerce, invoke, reconcile_arguments
from .metadata import ConstraintDoc, FunctionMetadata, ParamDoc, ReturnDoc
from .tool import Parameter, Signature, Tool, tool, type_name

__all__ = [
    # Metadata
    "FunctionMetadata", "ParamDoc", "ReturnDoc", "ConstraintDoc",
    # Tools
    "Tool", "Signature", "Parameter", "tool", "type_name",
    # Invocation
    "invoke", "reconcile_arguments", "coerce", "InvocationOutcome", "OutcomeKind",
]
