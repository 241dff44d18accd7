import os
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Mapping, Optional

_TRUTHY = {'1', 'true', 'yes', 'on'}

_ENV_NAMES = {
    'simulate_host': 'TESTER_SIMULATE_HOST',
    'host_global': 'TESTER_HOST_GLOBAL',
    'label_top_groups': 'TESTER_LABEL_TOP_GROUPS',
    'show_summary': 'TESTER_SUMMARY',
    'color': 'TESTER_COLOR',
    'indent': 'TESTER_INDENT',
}


@dataclass
class HarnessConfig:
    """configuration for a tester instance"""
    simulate_host: bool = False
    host_global: str = 'ScriptApp'
    label_top_groups: bool = False  # 'Describe "..."' headings for top-level groups
    show_summary: bool = False
    color: bool = False
    indent: str = '  '

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'HarnessConfig':
        """build a config from TESTER_* environment variables, defaults elsewhere"""
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        for f in fields(cls):
            raw = env.get(_ENV_NAMES[f.name])
            if raw is None:
                continue
            values[f.name] = raw.strip().lower() in _TRUTHY if f.type in (bool, 'bool') else raw
        return cls(**values)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
