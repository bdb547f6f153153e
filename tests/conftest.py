from __future__ import annotations

import json
from pathlib import Path

import pytest


@pytest.fixture
def translation_file(tmp_path: Path) -> Path:
    translations = {
        "welcome": "Welcome!",
        "goodbye": "Goodbye",
        "menu.title": "Menu",
        "greeting": "Welcome!",
    }
    path = tmp_path / "en.json"
    path.write_text(json.dumps(translations, ensure_ascii=False, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    root = tmp_path / "src"
    components = root / "components"
    components.mkdir(parents=True)

    (root / "app.js").write_text(
        "const a = I18n.t('welcome');\n"
        "const b = I18n.t(\"welcome\", { name });\n",
        encoding="utf-8",
    )
    (components / "Header.tsx").write_text(
        "export const Header = () => <h1>{I18n.t('welcome')}</h1>;\n"
        "export const Menu = () => <nav>{i18n.T( 'menu.title' )}</nav>;\n",
        encoding="utf-8",
    )
    # wrong extension, must be ignored
    (components / "notes.md").write_text("I18n.t('goodbye')\n", encoding="utf-8")
    return root
