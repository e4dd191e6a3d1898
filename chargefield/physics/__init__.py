"""
Physics module for 2D point-charge electrostatics.

This module contains the core computations:
- Charge records and the ordered charge set
- Coulomb field and potential by superposition
- Fixed-step field-line integration
"""

from .charges import Charge, ChargeSet, InvalidChargeError, validate_charges
from .field_evaluator import FieldEvaluator, field, potential
from .field_line_tracer import FieldLine, FieldLineTracer, TerminationReason, trace_line

__all__ = [
    'Charge',
    'ChargeSet',
    'InvalidChargeError',
    'validate_charges',
    'FieldEvaluator',
    'field',
    'potential',
    'FieldLine',
    'FieldLineTracer',
    'TerminationReason',
    'trace_line'
]
