# biography_store.py - One JSON file per user, plus an index of shared biographies
import hashlib
import json
import logging
import os
import tempfile
import threading

from biography_model import new_biography, normalize_biography
from config import STORAGE_CONFIG
from exceptions import ValidationError

logger = logging.getLogger(__name__)


def _has_stored_public_id(data):
    if not isinstance(data, dict):
        return False
    visibility = data.get("visibility") if isinstance(data.get("visibility"), dict) else {}
    public_id = visibility.get("publicId", data.get("publicId"))
    return isinstance(public_id, str) and bool(public_id.strip())


_LOCKS = {}
_LOCKS_GUARD = threading.Lock()


def _directory_lock(base_path):
    """One lock per storage directory, shared by every store opened on it."""
    key = os.path.realpath(base_path)
    with _LOCKS_GUARD:
        return _LOCKS.setdefault(key, threading.RLock())


class BiographyStore:
    """File-backed storage for biography records.

    ``find_or_create`` is atomic: the record file is published with a hard
    link, which fails if another writer got there first, and the loser
    returns the record that won.
    """

    def __init__(self, base_path=None):
        self.base_path = base_path or STORAGE_CONFIG["base_path"]
        self.index_file = os.path.join(self.base_path, STORAGE_CONFIG["public_index"])
        os.makedirs(self.base_path, exist_ok=True)
        self._lock = _directory_lock(self.base_path)

    def get_user_filename(self, user_id):
        if not isinstance(user_id, str) or not user_id.strip():
            raise ValidationError("A user id is required", field="user_id", value=user_id)
        user_hash = hashlib.sha256(user_id.encode()).hexdigest()[:16]
        return os.path.join(self.base_path, f"user_{user_hash}.json")

    def _read(self, path):
        if not os.path.exists(path):
            return None
        with open(path, 'r', encoding="utf-8") as f:
            return json.load(f)

    def _temp_file(self, data):
        fd, tmp_path = tempfile.mkstemp(dir=self.base_path, suffix=".tmp")
        with os.fdopen(fd, 'w', encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        return tmp_path

    def _write(self, path, data):
        os.replace(self._temp_file(data), path)

    def load(self, user_id):
        with self._lock:
            data = self._read(self.get_user_filename(user_id))
            if data is None:
                return None
            biography = normalize_biography(data, user_id=user_id)
            if biography["visibility"]["publicId"] and not _has_stored_public_id(data):
                # A public record written without a share id keeps the one it was just given
                logger.info("Assigned missing publicId for user %s", user_id)
                biography = self.save(biography)
            return biography

    def find_or_create(self, user_id):
        path = self.get_user_filename(user_id)
        with self._lock:
            existing = self.load(user_id)
            if existing is not None:
                return existing

            biography = new_biography(user_id)
            tmp_path = self._temp_file(biography)
            try:
                os.link(tmp_path, path)
            except FileExistsError:
                logger.debug("Biography for user %s was created concurrently", user_id)
                return self.load(user_id)
            finally:
                os.remove(tmp_path)

        logger.info("Created biography for user %s", user_id)
        return biography

    def update(self, user_id, mutate):
        """Load, change and write one record while holding the store lock.

        ``mutate`` edits the biography in place. If it raises, nothing is
        written.
        """
        with self._lock:
            biography = self.find_or_create(user_id)
            mutate(biography)
            return self.save(biography)

    def save(self, biography):
        biography = normalize_biography(biography)
        path = self.get_user_filename(biography["userId"])
        with self._lock:
            self._write(path, biography)
            public_id = biography["visibility"]["publicId"]
            if public_id:
                self._update_public_index(public_id, biography["userId"])
        return biography

    def _update_public_index(self, public_id, user_id):
        index = self._read(self.index_file) or {}
        if index.get(public_id) != user_id:
            index[public_id] = user_id
            self._write(self.index_file, index)

    def find_by_public_id(self, public_id):
        if not isinstance(public_id, str) or not public_id:
            return None
        with self._lock:
            user_id = (self._read(self.index_file) or {}).get(public_id)
        if not user_id:
            return None
        biography = self.load(user_id)
        if biography is None or biography["visibility"]["publicId"] != public_id:
            return None
        return biography
