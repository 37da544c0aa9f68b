from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

# Identifiers, endpoints, key material, checksums and version stamps are computed
# by the provider and cannot be written back into configuration.
DEFAULT_EXCLUDED_ATTRIBUTES: frozenset[str] = frozenset(
    {
        "id",
        "resource_id",
        "versionless_id",
        "resource_versionless_id",
        "secret_id",
        "versionless_secret_id",
        "vault_uri",
        "n",
        "e",
        "x",
        "y",
        "public_key_pem",
        "public_key_openssh",
        "certificate_data",
        "certificate_data_base64",
        "thumbprint",
        "content_md5",
        "version",
        "sku",
    }
)

DEFAULT_EXCLUDED_PREFIXES: tuple[str, ...] = ("primary_", "secondary_")


@dataclass(frozen=True)
class ExclusionRules:
    exact: frozenset[str] = field(default=DEFAULT_EXCLUDED_ATTRIBUTES)
    prefixes: tuple[str, ...] = DEFAULT_EXCLUDED_PREFIXES

    def extended(
        self,
        names: Iterable[str] = (),
        prefixes: Iterable[str] = (),
    ) -> ExclusionRules:
        return ExclusionRules(
            exact=self.exact | frozenset(names),
            prefixes=self.prefixes + tuple(p for p in prefixes if p not in self.prefixes),
        )


class ExclusionFilter:
    def __init__(self, rules: ExclusionRules | None = None) -> None:
        self.rules = rules or ExclusionRules()
        self._exact = frozenset(name.lower() for name in self.rules.exact)
        self._prefixes = tuple(prefix.lower() for prefix in self.rules.prefixes)

    def is_excluded(self, name: str) -> bool:
        lowered = name.lower()
        if lowered in self._exact:
            return True
        return lowered.startswith(self._prefixes)
