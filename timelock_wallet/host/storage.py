"""
Persistence backends for the wallet record
"""

import json
import os
import tempfile
from typing import Optional

from ..wallet import WalletState


class MemoryStorage:
    """Keeps the serialized record in memory; each load returns a fresh copy"""

    def __init__(self, state: Optional[WalletState] = None):
        self._data = (state or WalletState()).to_dict()

    def load(self) -> WalletState:
        return WalletState.from_dict(self._data)

    def save(self, state: WalletState) -> None:
        self._data = state.to_dict()

    def snapshot(self) -> dict:
        return dict(self._data)

    def restore(self, snapshot: dict) -> None:
        self._data = dict(snapshot)


class JsonFileStorage:
    """Stores the record as JSON on disk; a missing file is a fresh deployment"""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> WalletState:
        if not os.path.exists(self.path):
            return WalletState()

        with open(self.path, 'r', encoding='utf-8') as f:
            return WalletState.from_dict(json.load(f))

    def save(self, state: WalletState) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        # Write to a temp file then swap it in
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(state.to_dict(), f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def snapshot(self) -> Optional[dict]:
        if not os.path.exists(self.path):
            return None
        return self.load().to_dict()

    def restore(self, snapshot: Optional[dict]) -> None:
        if snapshot is None:
            if os.path.exists(self.path):
                os.remove(self.path)
            return
        self.save(WalletState.from_dict(snapshot))
