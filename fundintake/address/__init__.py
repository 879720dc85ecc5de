from fundintake.address.base import AddressSource
from fundintake.address.factory import AddressNormalizerFactory
from fundintake.address.models import AddressNormalizationResult, NormalizationMethod
from fundintake.address.normalizer import AddressNormalizer

__all__ = [
    "AddressNormalizationResult",
    "AddressNormalizer",
    "AddressNormalizerFactory",
    "AddressSource",
    "NormalizationMethod",
]
