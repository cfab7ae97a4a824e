"""Admission path - validation, authentication, preflight and command building."""

from .auth import AuthGate, SecretHash
from .command import CommandBuilder, TransferOptions, escape_path
from .identity import generate_job_id
from .pipeline import AdmissionPipeline
from .preflight import BaseCredentialVerifier, FTPCredentialVerifier
from .validator import extract_locator, parse_request

__all__ = [
    "AdmissionPipeline",
    "AuthGate",
    "BaseCredentialVerifier",
    "CommandBuilder",
    "FTPCredentialVerifier",
    "SecretHash",
    "TransferOptions",
    "escape_path",
    "extract_locator",
    "generate_job_id",
    "parse_request",
]
