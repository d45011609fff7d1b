"""Translate request-handling faults into stable error responses."""

from faultbridge.core.config import FaultBridgeSettings
from faultbridge.core.config import get_settings
from faultbridge.core.faults import BadRequestError
from faultbridge.core.faults import BindError
from faultbridge.core.faults import ConstraintViolation
from faultbridge.core.faults import ConstraintViolationError
from faultbridge.core.faults import DataNotFoundError
from faultbridge.core.faults import DecodingError
from faultbridge.core.faults import DownstreamError
from faultbridge.core.faults import DuplicateDataFoundError
from faultbridge.core.faults import ElementKind
from faultbridge.core.faults import Fault
from faultbridge.core.faults import FaultCategory
from faultbridge.core.faults import FieldViolation
from faultbridge.core.faults import ForbiddenError
from faultbridge.core.faults import InternalServerError
from faultbridge.core.faults import InvalidEnumError
from faultbridge.core.faults import InvalidFormatError
from faultbridge.core.faults import MismatchedInputError
from faultbridge.core.faults import PathNode
from faultbridge.core.faults import PathReference
from faultbridge.core.faults import ResourceNotFoundError
from faultbridge.core.faults import TypeMismatchError
from faultbridge.core.faults import UnauthorizedError
from faultbridge.core.faults import UnsupportedMediaTypeError
from faultbridge.core.faults import ValueInstantiationError
from faultbridge.schemas.error import ErrorResponse
from faultbridge.schemas.error import StackDigest
from faultbridge.schemas.error import ValidationSubError
from faultbridge.transport.registration import install_fault_handlers
from faultbridge.translation.translator import FaultTranslator

__all__ = [
    "BadRequestError",
    "BindError",
    "ConstraintViolation",
    "ConstraintViolationError",
    "DataNotFoundError",
    "DecodingError",
    "DownstreamError",
    "DuplicateDataFoundError",
    "ElementKind",
    "ErrorResponse",
    "Fault",
    "FaultBridgeSettings",
    "FaultCategory",
    "FaultTranslator",
    "FieldViolation",
    "ForbiddenError",
    "InternalServerError",
    "InvalidEnumError",
    "InvalidFormatError",
    "MismatchedInputError",
    "PathNode",
    "PathReference",
    "ResourceNotFoundError",
    "StackDigest",
    "TypeMismatchError",
    "UnauthorizedError",
    "UnsupportedMediaTypeError",
    "ValidationSubError",
    "ValueInstantiationError",
    "get_settings",
    "install_fault_handlers",
]
