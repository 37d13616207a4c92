from .media_search import ConnectionCheckUseCase, MediaSearchUseCase

__all__ = ["ConnectionCheckUseCase", "MediaSearchUseCase"]
