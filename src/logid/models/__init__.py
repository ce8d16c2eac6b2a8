"""Pydantic data models for logid."""

from logid.models.format import FormatDescriptor, LocationInfo

__all__ = ["FormatDescriptor", "LocationInfo"]
