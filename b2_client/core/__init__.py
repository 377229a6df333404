from b2_client.core.hasher import ContentHasher

__all__ = ["ContentHasher"]
