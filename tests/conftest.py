"""Shared fixtures: throwaway project trees on disk."""

from pathlib import Path
from typing import Callable, Dict, Union

import pytest

USERS_JS = """\
const express = require("express");
const router = express.Router();

router.get("/users/:id", auth, loadUser, (req, res) => {
  res.json(req.user);
});
router.post("/users", auth, validate, createUser);

module.exports = router;
"""

INDEX_JS = """\
import express from "express";
import users from "./routes/users.js";

const app = express();
app.use("/api", users);
app.get("/health", (req, res) => res.send("ok"));

export default app;
"""

BROKEN_JS = """\
router.get("/broken", (req, res) => {
  res.send("never closed"
"""


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[[Dict[str, Union[str, bytes]]], Path]:
    """Write {relative path: content} under tmp_path/project and return its root."""

    def _make(files: Dict[str, Union[str, bytes]]) -> Path:
        root = tmp_path / "project"
        root.mkdir(exist_ok=True)
        for rel, content in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def express_project(make_project) -> Path:
    return make_project({
        "index.js": INDEX_JS,
        "routes/users.js": USERS_JS,
        "src/utils/helper.js": 'api.get("/never-seen");\n',
    })
