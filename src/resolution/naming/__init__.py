"""Naming services: one backend per resolvable naming system."""

from resolution.naming.api import Udapi
from resolution.naming.base import NamingService
from resolution.naming.blockchain import BlockchainNamingService
from resolution.naming.cns import Cns
from resolution.naming.ens import Ens
from resolution.naming.zns import Zns

__all__ = [
    "BlockchainNamingService",
    "Cns",
    "Ens",
    "NamingService",
    "Udapi",
    "Zns",
]
