from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'rooms': 0,
        'doors': 0,
        'door_shortfall': 0,
        'placement_attempts': 0,
        'size_rejections': 0,
        'area_usage_pct': 0,
        'regenerations': 0,
        'entry_exit_attempts': 0,
        'containers_floor': 0,
        'containers_chests': 0,
        'chests_nested': 0,
        'corridor_links': 0,
        'corridors_carved': 0,
        'paths_failed': 0,
        'links_skipped': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
