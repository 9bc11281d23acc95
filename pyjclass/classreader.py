"""
Java class file reader.

Decodes a class file in the order the format lays it out, threading a byte
offset through each section. Also provides helpers to read class files from
disk, from a classpath of directories and jars, and in batches.
"""

import os
import zipfile
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Optional

from .classfile import ClassFile, MAGIC
from .constants import decode_constant_pool
from .errors import BadMagicNumberError
from .log import logger
from .options import DecodeOptions, DEFAULT_OPTIONS
from .reader import read_u2, read_u4
from .structures import decode_attributes, decode_fields, decode_interfaces, decode_methods


def decode_class(data, options: Optional[DecodeOptions] = None) -> ClassFile:
    """Decode a complete class file from ``data``.

    Bytes after the class attributes are ignored.

    Raises:
        ClassDecodeError: Any subclass, carrying the offset of the failure.
    """
    options = options or DEFAULT_OPTIONS

    magic, cursor = read_u4(data, 0)
    if magic != MAGIC:
        raise BadMagicNumberError(magic, 0)

    minor_version, cursor = read_u2(data, cursor)
    major_version, cursor = read_u2(data, cursor)

    constant_pool_count, cursor = read_u2(data, cursor)
    constant_pool, cursor = decode_constant_pool(data, constant_pool_count, cursor, options)
    logger.debug("Constant pool: %d entries, ends at offset %d", len(constant_pool), cursor)

    access_flags, cursor = read_u2(data, cursor)
    this_class, cursor = read_u2(data, cursor)
    super_class, cursor = read_u2(data, cursor)

    interfaces_count, cursor = read_u2(data, cursor)
    interfaces, cursor = decode_interfaces(data, interfaces_count, cursor)

    fields_count, cursor = read_u2(data, cursor)
    fields, cursor = decode_fields(data, fields_count, cursor)

    methods_count, cursor = read_u2(data, cursor)
    methods, cursor = decode_methods(data, methods_count, cursor)

    attributes_count, cursor = read_u2(data, cursor)
    attributes, cursor = decode_attributes(data, attributes_count, cursor)

    logger.debug(
        "Decoded class %d.%d: %d interfaces, %d fields, %d methods, %d attributes",
        major_version, minor_version, len(interfaces), len(fields), len(methods), len(attributes),
    )
    if cursor < len(data):
        logger.debug("Ignoring %d trailing byte(s) at offset %d", len(data) - cursor, cursor)

    return ClassFile(
        minor_version=minor_version,
        major_version=major_version,
        constant_pool=constant_pool,
        access_flags=access_flags,
        this_class=this_class,
        super_class=super_class,
        interfaces=interfaces,
        fields=fields,
        methods=methods,
        attributes=attributes,
    )


def read_class_file(path: str | Path, options: Optional[DecodeOptions] = None) -> ClassFile:
    """Read a single class file."""
    data = Path(path).read_bytes()
    return decode_class(data, options)


def decode_files(paths: Iterable[str | Path], options: Optional[DecodeOptions] = None,
                 max_workers: Optional[int] = None) -> list[ClassFile]:
    """Decode independent class files concurrently.

    Results are returned in the order of ``paths``. The first failure is
    raised once all submitted work has finished.
    """
    paths = list(paths)
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(lambda p: read_class_file(p, options), paths))


class ClassPath:
    """
    Ordered search path of directories and jar/zip archives.

    Classes are looked up by internal name (``java/lang/String``); the binary
    name form (``java.lang.String``) is accepted as well. The first entry that
    holds the class wins. Archives stay open until ``close()``.
    """

    ARCHIVE_SUFFIXES = (".jar", ".zip")

    def __init__(self, options: Optional[DecodeOptions] = None,
                 paths: Iterable[str | Path] = ()):
        self.options = options
        self._entries: list[Path | zipfile.ZipFile] = []
        try:
            for path in paths:
                self.add_path(path)
        except (OSError, ValueError):
            self.close()
            raise

    @classmethod
    def from_string(cls, classpath: str, options: Optional[DecodeOptions] = None) -> "ClassPath":
        """Build a classpath from a ``os.pathsep``-separated string."""
        return cls(options, [p for p in classpath.split(os.pathsep) if p])

    @property
    def entries(self) -> tuple[Path | zipfile.ZipFile, ...]:
        return tuple(self._entries)

    def add_path(self, path: str | Path):
        """Append a directory or an archive to the search order."""
        path = Path(path)
        if path.suffix.lower() in self.ARCHIVE_SUFFIXES:
            try:
                archive = zipfile.ZipFile(path)
            except zipfile.BadZipFile as e:
                raise ValueError(f"Not a jar or zip archive: {path}") from e
            self._entries.append(archive)
        elif path.is_dir():
            self._entries.append(path)
        else:
            raise ValueError(f"Invalid classpath entry: {path}")

    def read_bytes(self, class_name: str) -> Optional[bytes]:
        """Raw bytes of the named class, or None if no entry holds it."""
        member = class_name.replace(".", "/") + ".class"
        for entry in self._entries:
            if isinstance(entry, zipfile.ZipFile):
                try:
                    data = entry.read(member)
                except KeyError:
                    continue
                logger.debug("Found %s in %s", member, entry.filename)
                return data
            candidate = entry / member
            if candidate.is_file():
                logger.debug("Found %s", candidate)
                return candidate.read_bytes()
        logger.debug("%s not on classpath", member)
        return None

    def find_class(self, class_name: str) -> Optional[ClassFile]:
        """Decode the named class, or return None if it is not found."""
        data = self.read_bytes(class_name)
        if data is None:
            return None
        return decode_class(data, self.options)

    def close(self):
        for entry in self._entries:
            if isinstance(entry, zipfile.ZipFile):
                entry.close()
        self._entries.clear()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
