# -*- coding: utf-8 -*-
"""Errors raised while reading the embedded medicine database."""


class MedpagesError(Exception):
    """Base class for fatal build errors."""


class MissingMarkerError(MedpagesError):
    """The host document does not contain the database marker or declaration."""


class MalformedLiteralError(MedpagesError):
    """The embedded literal could not be isolated or parsed."""
