"""
Platform / region routing values.

Summoner and league endpoints are addressed by platform (na1, euw1, ...),
match endpoints by the region that encloses the platform (americas, ...).
See https://developer.riotgames.com/docs/tft#_routing-values
"""

from types import MappingProxyType
from typing import Mapping, Optional, Sequence


REGION_PLATFORMS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "americas": ("br1", "la1", "la2", "na1"),
    "asia": ("jp1", "kr", "oc1"),
    "europe": ("eun1", "euw1", "tr1", "ru"),
})


class RegionRouter:
    """Read-only platform -> region lookup built from a region -> platforms table"""

    def __init__(self, region_platforms: Mapping[str, Sequence[str]] = REGION_PLATFORMS):
        platform_region: dict[str, str] = {}
        for region, platforms in region_platforms.items():
            for platform in platforms:
                if platform in platform_region:
                    raise ValueError(
                        f"platform {platform!r} listed under both "
                        f"{platform_region[platform]!r} and {region!r}"
                    )
                platform_region[platform] = region

        self._regions = tuple(region_platforms)
        self._platform_region = MappingProxyType(platform_region)

    @property
    def regions(self) -> tuple[str, ...]:
        return self._regions

    @property
    def platforms(self) -> tuple[str, ...]:
        return tuple(self._platform_region)

    def region_of(self, platform: str) -> Optional[str]:
        """Region enclosing `platform`, or None for an unlisted platform."""
        return self._platform_region.get(platform)

    def is_platform(self, value: str) -> bool:
        return value in self._platform_region

    def is_region(self, value: str) -> bool:
        return value in self._regions

    def is_routing_domain(self, value: str) -> bool:
        return self.is_platform(value) or self.is_region(value)
