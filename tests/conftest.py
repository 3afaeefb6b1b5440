# SPDX-License-Identifier: Apache-2.0
import json
import os
from pathlib import Path

import pytest

TREATY_HEADER = "체결대상국가,분야,조약명,서명일/각서교환일,발효일"

COORDS = {
    "France": [46.0, 2.0],
    "Japan": [36.0, 138.0],
    "Brazil": [-10.0, -55.0],
    "Kenya": [1.0, 38.0],
}


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path_factory, monkeypatch):
    """Keep user config files and TREATYGLOBE_* variables out of tests."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("TREATYGLOBE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("TREATYGLOBE_CONFIG", str(home / "missing.yaml"))


@pytest.fixture
def treaty_csv(tmp_path) -> Path:
    rows = [
        TREATY_HEADER,
        "France,경제,한-프랑스 투자보장협정,2020-01-02,2020-06-01",
        "Japan,문화,한-일 문화협정,1965-06-22,1965-12-18",
        "Atlantis,기타,가상 조약,2001-01-01,2001-02-01",
        ",기타,국가 없음,2001-01-01,2001-02-01",
        "Brazil,과학기술,한-브라질 과학기술협력협정,1991-09-10,1992-03-01",
    ]
    path = tmp_path / "treaties.csv"
    path.write_text("\n".join(rows) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def coords_json(tmp_path) -> Path:
    path = tmp_path / "coords.json"
    path.write_text(json.dumps(COORDS), encoding="utf-8")
    return path
