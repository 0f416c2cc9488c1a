"""HAVEN service layer."""
