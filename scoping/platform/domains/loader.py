"""
Read access to the domain registry.
Used to populate selectors and to resolve the domain of the current request.
"""

import logging
from typing import Dict, Optional

from .models import Domain

logger = logging.getLogger(__name__)


class DomainLoader:
    """Loads domains for option lists and host negotiation."""

    def load_options_list(self) -> Dict[str, str]:
        """Active domains keyed by machine name, ordered by weight then name."""
        domains = Domain.objects.filter(is_active=True).order_by("weight", "name")
        return {domain.domain_id: domain.name for domain in domains}

    def load_default(self) -> Optional[Domain]:
        return Domain.objects.filter(is_default=True, is_active=True).first()

    def negotiate(self, host: Optional[str]) -> Optional[Domain]:
        """
        Resolve the domain serving the given host name.
        Falls back to the default domain when the host is not registered.
        """
        if host:
            hostname = host.split(":", 1)[0].lower()
            domain = Domain.objects.filter(hostname=hostname, is_active=True).first()
            if domain:
                return domain
            logger.debug(f"No active domain for host {hostname}, using default domain")
        return self.load_default()


domain_loader = DomainLoader()
