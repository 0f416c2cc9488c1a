"""
HAVEN - Crisis Risk Assessment and Tiered Response Engine

This package provides the crisis-safety core embedded in the HAVEN
conversational companion: risk scoring of user messages, tiered
crisis responses, event logging with human escalation, and screening
of AI-generated replies before delivery.

IMPORTANT: This is a safety-critical component.
Every response path must degrade to crisis resources, never to an error.
"""

__version__ = "0.1.0"
__author__ = "HAVEN Engineering Team"
