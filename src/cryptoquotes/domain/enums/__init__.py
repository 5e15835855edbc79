from cryptoquotes.domain.enums.provider import ProviderName

__all__ = ["ProviderName"]
