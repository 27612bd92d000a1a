from .create_book import CreateBookUseCase

__all__ = ["CreateBookUseCase"]
