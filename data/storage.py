"""
File storage manager for conversation history
"""
import asyncio
import json
from pathlib import Path
from typing import Any, Dict, List, Optional
from uuid import uuid4

import aiofiles
import aiofiles.os

from configs.settings import settings
from utils.logger import get_logger

logger = get_logger(__name__)

class StorageManager:
    """JSON document storage rooted at a directory"""

    def __init__(self, root: Optional[str] = None):
        self._root = Path(root or settings.storage_dir)
        self._lock = asyncio.Lock()
        self._initialized = False

    @property
    def root(self) -> Path:
        return self._root

    @property
    def lock(self) -> asyncio.Lock:
        """Serializes read-modify-write cycles on this storage"""
        return self._lock

    async def initialize(self):
        """Create the storage directory"""
        await aiofiles.os.makedirs(self._root, exist_ok=True)
        self._initialized = True
        logger.info("Storage initialized", root=str(self._root.resolve()))

    async def close(self):
        self._initialized = False

    async def collection(self, name: str) -> Path:
        path = self._root / name
        await aiofiles.os.makedirs(path, exist_ok=True)
        return path

    async def read_json(self, path: Path) -> Optional[Dict[str, Any]]:
        if not await aiofiles.os.path.exists(path):
            return None
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            return json.loads(await f.read())

    async def write_json(self, path: Path, data: Dict[str, Any]):
        """Atomically replace path with data"""
        tmp_path = path.with_name(f"{path.stem}.{uuid4().hex}.tmp")
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(data, ensure_ascii=False))
        await aiofiles.os.replace(tmp_path, path)

    async def delete(self, path: Path) -> bool:
        """Remove path, False when it does not exist"""
        try:
            await aiofiles.os.remove(path)
            return True
        except FileNotFoundError:
            return False

    async def list_documents(self, directory: Path) -> List[Path]:
        names = await aiofiles.os.listdir(directory)
        return [directory / name for name in sorted(names) if name.endswith(".json")]

    async def read_all_json(self, directory: Path) -> List[Dict[str, Any]]:
        documents = []
        for path in await self.list_documents(directory):
            try:
                documents.append(await self.read_json(path))
            except (OSError, json.JSONDecodeError) as e:
                logger.warning("Skipping unreadable document", path=str(path), error=str(e))
        return [d for d in documents if d is not None]

    async def health_check(self) -> Dict[str, Any]:
        """Storage writable check"""
        try:
            await aiofiles.os.makedirs(self._root, exist_ok=True)
            check_path = self._root / f".write-check.{uuid4().hex}"
            async with aiofiles.open(check_path, "w", encoding="utf-8") as f:
                await f.write("ok")
            await aiofiles.os.remove(check_path)
            return {"status": "healthy", "root": str(self._root)}
        except OSError as e:
            return {"status": "unhealthy", "root": str(self._root), "error": str(e)}

storage_manager = StorageManager()
