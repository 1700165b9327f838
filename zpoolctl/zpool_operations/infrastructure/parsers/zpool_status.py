"""
Parser for the human readable output of ``zpool status`` and ``zpool import``.

Both commands print one block per pool::

      pool: tank
     state: ONLINE
    config:

            NAME              STATE     READ WRITE CKSUM
            tank              ONLINE       0     0     0
              mirror-0        ONLINE       0     0     0
                /vdevs/vdev0  ONLINE       0     0     0
            logs
              /vdevs/vdev1    ONLINE       0     0     0

    errors: No known data errors

``zpool import`` prints an ``id:`` header and omits the error counters.
"""
import re
from typing import Dict, List, Optional, Tuple

from ...core.entities.properties import Health
from ...core.entities.zpool import Zpool, VdevStatus

_HEADER_RE = re.compile(r'^\s*([a-z]+):\s?(.*)$')
_COUNTER_RE = re.compile(r'^\d+(?:\.\d+)?[KMGTP]?$')
_SUFFIXES = {'K': 10 ** 3, 'M': 10 ** 6, 'G': 10 ** 9, 'T': 10 ** 12, 'P': 10 ** 15}

# Top level groups in the config section and the Zpool list they fill.
_GROUPS = {'logs': 'logs', 'cache': 'caches', 'spares': 'spares'}
_VDEV_KINDS = ('mirror', 'raidz1', 'raidz2', 'raidz3', 'raidz', 'draid', 'replacing', 'spare')


class ZpoolStatusParser:
    """Parses `zpool status -v -P` and `zpool import [-d dir]` output."""

    @classmethod
    def parse(cls, raw_text: str) -> List[Zpool]:
        """Parse every pool block in ``raw_text``.

        Raises ValueError when a block is malformed.
        """
        return [cls._build_pool(headers, config) for headers, config in cls._split_blocks(raw_text)]

    @classmethod
    def parse_one(cls, raw_text: str, pool_name: str) -> Zpool:
        for pool in cls.parse(raw_text):
            if pool.name == pool_name:
                return pool
        raise ValueError(f"Pool '{pool_name}' not found in zpool output")

    @staticmethod
    def _split_blocks(raw_text: str) -> List[Tuple[Dict[str, str], List[str]]]:
        blocks: List[Tuple[Dict[str, str], List[str]]] = []
        headers: Dict[str, str] = {}
        config: List[str] = []
        last_key: Optional[str] = None
        in_config = False

        for line in raw_text.splitlines():
            match = _HEADER_RE.match(line)
            key = match.group(1) if match else None

            if key == 'pool':
                headers, config = {}, []
                blocks.append((headers, config))
                in_config = False
            elif not blocks:
                # Anything before the first pool, e.g. "no pools available".
                continue

            if in_config and key not in ('pool', 'errors'):
                config.append(line)
                continue

            if match:
                last_key = key
                headers[key] = match.group(2).strip()
                in_config = key == 'config'
                if key == 'errors':
                    in_config = False
            elif line.strip() and last_key is not None:
                # Continuation of a multi-line header such as status/action.
                headers[last_key] = f"{headers[last_key]} {line.strip()}".strip()

        return blocks

    @classmethod
    def _build_pool(cls, headers: Dict[str, str], config: List[str]) -> Zpool:
        name = headers.get('pool', '')
        if not name:
            raise ValueError("Pool block without a name")
        if 'state' not in headers:
            raise ValueError(f"Pool '{name}' has no state")

        pool_id = headers.get('id')
        pool = Zpool(
            name=name,
            health=Health.parse(headers['state']),
            id=int(pool_id) if pool_id else None,
            action=headers.get('action') or None,
            errors=headers.get('errors') or None,
            reason=headers.get('status') or None,
        )
        cls._parse_config(config, pool)
        return pool

    @classmethod
    def _parse_config(cls, lines: List[str], pool: Zpool) -> None:
        base: Optional[int] = None
        stack: List[Tuple[int, VdevStatus]] = []
        target = pool.vdevs

        for line in lines:
            expanded = line.expandtabs(8)
            tokens = expanded.split()
            if not tokens or tokens[0] == 'NAME':
                continue

            indent = len(expanded) - len(expanded.lstrip())
            if base is None:
                base = indent
            depth = (indent - base) // 2

            if depth <= 0:
                # Pool root line or a group header such as "logs".
                stack = []
                target = getattr(pool, _GROUPS[tokens[0]]) if tokens[0] in _GROUPS else pool.vdevs
                continue

            node = cls._parse_vdev(tokens)
            while stack and stack[-1][0] >= depth:
                stack.pop()
            if stack:
                stack[-1][1].children.append(node)
            else:
                target.append(node)
            stack.append((depth, node))

    @classmethod
    def _parse_vdev(cls, tokens: List[str]) -> VdevStatus:
        if len(tokens) < 2:
            raise ValueError(f"Vdev line without a state: {' '.join(tokens)}")

        name, rest = tokens[0], tokens[2:]
        counters = [0, 0, 0]
        if len(rest) >= 3 and all(_COUNTER_RE.match(token) for token in rest[:3]):
            counters = [cls._counter(token) for token in rest[:3]]
            rest = rest[3:]

        return VdevStatus(
            name=name,
            kind=cls._vdev_kind(name),
            health=Health.parse(tokens[1]),
            read_errors=counters[0],
            write_errors=counters[1],
            checksum_errors=counters[2],
            reason=' '.join(rest) or None,
        )

    @staticmethod
    def _vdev_kind(name: str) -> str:
        prefix = name.split('-', 1)[0]
        if '-' in name and prefix in _VDEV_KINDS:
            return prefix
        return 'disk'

    @staticmethod
    def _counter(token: str) -> int:
        suffix = token[-1]
        if suffix in _SUFFIXES:
            return int(float(token[:-1]) * _SUFFIXES[suffix])
        return int(token)
