"""Tests for metadata records and the OS-backed provider.

Covers kind decoding, follow vs no-follow lookups on symlinks, error-reason
mapping, and identity resolution failures.
"""

from __future__ import annotations

import os
import stat
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from dirlist.errors import IdentityError, MetadataError, MetadataFailure
from dirlist.metadata import FileKind, IdentityResolver, MetadataRecord, OsMetadataProvider, kind_from_mode


class KindFromModeTests(unittest.TestCase):
    def test_decodes_every_file_format(self) -> None:
        cases = {
            stat.S_IFREG | 0o644: FileKind.REGULAR,
            stat.S_IFDIR | 0o755: FileKind.DIRECTORY,
            stat.S_IFLNK | 0o777: FileKind.SYMLINK,
            stat.S_IFBLK | 0o660: FileKind.BLOCK_DEVICE,
            stat.S_IFCHR | 0o620: FileKind.CHAR_DEVICE,
            stat.S_IFIFO | 0o600: FileKind.FIFO,
            stat.S_IFSOCK | 0o755: FileKind.SOCKET,
        }
        for mode, expected in cases.items():
            with self.subTest(mode=oct(mode)):
                self.assertIs(kind_from_mode(mode), expected)

    def test_unrecognized_format_is_unknown(self) -> None:
        self.assertIs(kind_from_mode(0o644), FileKind.UNKNOWN)


class OsMetadataProviderTests(unittest.TestCase):
    def test_symlink_is_resolved_only_when_following(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            target = root / "data"
            target.mkdir()
            link = root / "alias"
            link.symlink_to("data")
            provider = OsMetadataProvider()

            self.assertIs(provider.stat_no_follow(link).kind, FileKind.SYMLINK)
            self.assertIs(provider.stat_follow(link).kind, FileKind.DIRECTORY)
            self.assertEqual(provider.read_link(link), "data")

    def test_record_carries_stat_fields(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "tool.sh"
            path.write_text("echo hi\n", encoding="utf-8")
            path.chmod(0o755)

            record = OsMetadataProvider().stat_no_follow(path)
            raw = os.lstat(path)

            self.assertTrue(record.is_regular)
            self.assertTrue(record.owner_executable)
            self.assertEqual(record.permission_bits, 0o755)
            self.assertEqual(record.size, 8)
            self.assertEqual(record.inode, raw.st_ino)
            self.assertEqual(record.mtime_ns, raw.st_mtime_ns)

    def test_missing_path_maps_to_not_found(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "nope"
            provider = OsMetadataProvider()

            with self.assertRaises(MetadataError) as caught:
                provider.stat_follow(missing)
            self.assertIs(caught.exception.reason, MetadataFailure.NOT_FOUND)
            self.assertEqual(caught.exception.path, missing)
            self.assertIsInstance(caught.exception.__cause__, FileNotFoundError)

    def test_read_link_on_regular_file_fails(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "plain.txt"
            path.write_text("x", encoding="utf-8")

            with self.assertRaises(MetadataError) as caught:
                OsMetadataProvider().read_link(path)
            self.assertIs(caught.exception.reason, MetadataFailure.OTHER)

    def test_permission_error_maps_to_denied(self) -> None:
        with mock.patch("dirlist.metadata.os.lstat", side_effect=PermissionError(13, "Permission denied")):
            with self.assertRaises(MetadataError) as caught:
                OsMetadataProvider().stat_no_follow(Path("/locked"))
        self.assertIs(caught.exception.reason, MetadataFailure.DENIED)
        self.assertIn("Permission denied", str(caught.exception))


class IdentityResolverTests(unittest.TestCase):
    def test_unknown_owner_raises_identity_error(self) -> None:
        with mock.patch("dirlist.metadata.pwd.getpwuid", side_effect=KeyError(4242)):
            with self.assertRaises(IdentityError) as caught:
                IdentityResolver().user_name(4242)
        self.assertEqual(caught.exception.kind, "owner")
        self.assertEqual(caught.exception.ident, 4242)

    def test_unknown_group_raises_identity_error(self) -> None:
        with mock.patch("dirlist.metadata.grp.getgrgid", side_effect=KeyError(77)):
            with self.assertRaises(IdentityError) as caught:
                IdentityResolver().group_name(77)
        self.assertEqual(str(caught.exception), "cannot resolve group id 77")

    def test_known_ids_resolve_to_names(self) -> None:
        fake_user = mock.Mock(pw_name="alice")
        fake_group = mock.Mock(gr_name="staff")
        with (
            mock.patch("dirlist.metadata.pwd.getpwuid", return_value=fake_user),
            mock.patch("dirlist.metadata.grp.getgrgid", return_value=fake_group),
        ):
            resolver = IdentityResolver()
            self.assertEqual(resolver.user_name(1000), "alice")
            self.assertEqual(resolver.group_name(1000), "staff")


class MetadataRecordTests(unittest.TestCase):
    def test_record_is_immutable(self) -> None:
        record = MetadataRecord(
            kind=FileKind.REGULAR,
            mode=stat.S_IFREG | 0o644,
            nlink=1,
            uid=0,
            gid=0,
            size=0,
            mtime_ns=0,
            atime_ns=0,
            ctime_ns=0,
            inode=1,
        )
        with self.assertRaises(AttributeError):
            record.size = 10  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
