'''KR: 스캐너 테스트 픽스처. EN: Pytest fixtures for scanner tests.'''

from __future__ import annotations

import queue
from pathlib import Path
from typing import Any

import pytest

from tests.fixtures.virtual_fs import SCENARIO_FILES, create_virtual_tree


@pytest.fixture
def scenario_tree(tmp_path: Path) -> Path:
    '''a.txt, .hidden.txt, Thumbs.db, sub/b.pdf 트리(KR). Build the reference scan tree (EN).'''

    root = tmp_path / 'scenario'
    create_virtual_tree(root, SCENARIO_FILES)
    return root


@pytest.fixture
def entry_queue() -> 'queue.Queue[Any]':
    '''넉넉한 크기의 대상 큐(KR). Roomy bounded target queue (EN).'''

    return queue.Queue(maxsize=256)
