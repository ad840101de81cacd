from protohub.realtime.manager import ConnectionManager, manager

__all__ = ["ConnectionManager", "manager"]
