"""
shared/nim - AIX NIM 인벤토리

NIM 마스터/클라이언트의 niminfo, oslevel, lsnim 속성을 수집하여
하나의 중첩 dict 문서로 만듭니다.

Usage:
    from shared.nim import collect_nim_inventory

    inventory = collect_nim_inventory()
    if inventory.is_master:
        print(list(inventory.clients))
"""

from .attributes import SUPERFLUOUS_ATTRIBUTES, deep_merge, purge_superfluous_attributes, sort_by_name
from .hosts import HostRole, collect_host, collect_hosts
from .inventory import NimInventory, collect_nim_inventory, is_master, read_niminfo
from .parser import nim_attributes_to_dict, niminfo_to_dict, niminfo_to_lines
from .resources import ResourceType, collect_resource, collect_resources

__all__: list[str] = [
    # Parser
    "niminfo_to_dict",
    "nim_attributes_to_dict",
    "niminfo_to_lines",
    # Attributes
    "SUPERFLUOUS_ATTRIBUTES",
    "purge_superfluous_attributes",
    "deep_merge",
    "sort_by_name",
    # Collectors
    "HostRole",
    "collect_host",
    "collect_hosts",
    "ResourceType",
    "collect_resource",
    "collect_resources",
    # Inventory
    "NimInventory",
    "collect_nim_inventory",
    "is_master",
    "read_niminfo",
]
