"""Stampman protocols: the collaborators the engine depends on."""

from stampman.protocols.authorization import Authorizer
from stampman.protocols.notifications import NotificationEmitter
from stampman.protocols.runtime import Clock, CodeGenerator

__all__ = [
    "Authorizer",
    "NotificationEmitter",
    "Clock",
    "CodeGenerator",
]
