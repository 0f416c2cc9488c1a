"""
HAVEN Infrastructure Layer

Record stores, monitoring and metrics. Stores implement the
CrisisEventStore protocol so the engine never depends on a backend.
"""
