# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.04
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/importers/git.py

"""Importer for theme packages hosted in git repositories."""

import os
import shutil
import subprocess
import uuid
from pathlib import Path
from typing import Optional

from loguru import logger

from themesync.config.manager import SyncConfig
from themesync.data.field_paths import canonical_path, opts_from_file_path
from themesync.data.models import Theme
from themesync.system.exceptions import AuthenticationError, TransportError
from .base import Importer

_AUTH_FAILURE_MARKERS = ("Permission denied", "Authentication failed", "could not read Username")


def normalize_git_url(url: str) -> str:
    """GitHub https remotes are cloned through their .git URL."""
    url = url.strip()
    if url.startswith("https://github.com") and not url.endswith(".git"):
        url = url.rstrip("/") + ".git"
    return url


class GitImporter(Importer):
    """Stages a theme by cloning its git repository."""

    def __init__(
        self,
        url: str,
        private_key: Optional[str] = None,
        branch: Optional[str] = None,
        config: Optional[SyncConfig] = None,
    ) -> None:
        super().__init__(config)
        self.url = normalize_git_url(url)
        self.private_key = private_key
        self.branch = branch

    def _run_git(self, *args: str, cwd: Optional[Path] = None, env: Optional[dict] = None) -> str:
        """Run a git command and return its stdout.

        Raises:
            TransportError: If git is missing, times out or exits non-zero
        """
        cmd = ["git", *args]
        run_env = {**os.environ, "GIT_TERMINAL_PROMPT": "0", **(env or {})}
        logger.debug(f"Running {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                env=run_env,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.config.git_timeout,
            )
        except FileNotFoundError as e:
            raise TransportError("git executable not found", retry_possible=False, command=cmd[1]) from e
        except subprocess.TimeoutExpired as e:
            raise TransportError(
                f"git {args[0]} timed out after {self.config.git_timeout:g}s", command=cmd[1]
            ) from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            if any(marker in stderr for marker in _AUTH_FAILURE_MARKERS):
                raise AuthenticationError(f"Authentication failed for {self.url}", command=cmd[1]) from e
            raise TransportError(f"git {args[0]} failed: {stderr or e}", command=cmd[1]) from e
        return result.stdout

    def stage(self) -> None:
        clone_args = ["clone"]
        if self.branch:
            clone_args += ["--single-branch", "-b", self.branch]
        clone_args += [self.url, str(self.temp_folder)]

        if self.private_key:
            self._clone_private(clone_args)
        else:
            self._run_git(*clone_args)
        logger.info(f"Cloned {self.url} into {self.temp_folder}")

    def _clone_private(self, clone_args: list[str]) -> None:
        ssh_folder = self.temp_folder.parent / f"theme_ssh_{uuid.uuid4().hex}"
        ssh_folder.mkdir(parents=True)
        try:
            key_file = ssh_folder / "id_rsa"
            key_file.write_text(self.private_key)
            key_file.chmod(0o600)
            ssh_command = f"ssh -i {key_file} -o StrictHostKeyChecking=no"
            self._run_git(*clone_args, env={"GIT_SSH_COMMAND": ssh_command})
        finally:
            try:
                shutil.rmtree(ssh_folder)
            except OSError as e:
                logger.warning(f"Failed to remove temporary key folder {ssh_folder}: {e}")

    def version(self) -> str:
        return self._run_git("rev-parse", "HEAD", cwd=self.temp_folder).strip()

    def commits_since(self, old_version: Optional[str]) -> tuple[str, int]:
        """Return (HEAD commit, number of commits between old_version and HEAD).

        An old_version the clone does not know (rebased or force-pushed
        history) counts as zero commits behind. That can report a theme as
        up to date when it is not.
        """
        head = self.version()
        if not old_version:
            return head, 0
        try:
            count = self._run_git("rev-list", f"{old_version}..HEAD", "--count", cwd=self.temp_folder)
            return head, int(count.strip())
        except (TransportError, ValueError) as e:
            logger.warning(f"Cannot measure distance from {old_version} to {head} in {self.url}: {e}")
            return head, 0

    def diff_local_changes(self, theme: Theme, local_version: Optional[str]) -> str:
        """Diff the theme's current fields against the version it was imported at.

        Returns the staged unified diff, or an empty string when the theme has
        no local edits.
        """
        if local_version:
            self._run_git("checkout", "--quiet", local_version, cwd=self.temp_folder)

        # Replace every field-shaped file with what the theme holds now,
        # keeping the package's own path where a file already exists
        existing_paths = {}
        for rel_path in list(self.all_files()):
            placement = opts_from_file_path(rel_path)
            if placement is not None:
                existing_paths[(placement.target, placement.name, placement.kind.category)] = rel_path
                (self.temp_folder / rel_path).unlink()
        for field in theme.fields:
            rel_path = existing_paths.get(field.identity) or canonical_path(field)
            if rel_path is None:
                continue
            dest = self.temp_folder / rel_path
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(field.value, encoding="utf-8")

        # Diffing the index shows renames as renames
        self._run_git("add", "-A", cwd=self.temp_folder)
        return self._run_git("diff", "--staged", cwd=self.temp_folder)
