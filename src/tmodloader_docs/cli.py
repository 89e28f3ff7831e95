"""CLI for tmodloader-docs: setup, serve, doctor, search and read commands."""

import argparse
import asyncio
import json
import logging
import os
import platform
import sys
from importlib.metadata import version as pkg_version
from pathlib import Path

from .config import load_config
from .errors import DocsError
from .logging_config import setup_logging

logger = logging.getLogger(__name__)

SERVER_NAME = "tmodloader-docs"

MCP_ENTRY = {
	"type": "stdio",
	"command": "tmodloader-docs",
	"args": ["serve"],
}

DEFAULT_CONFIG_TOML = (
	"# tmodloader-docs configuration\n"
	"\n"
	'# docs_base_url = "https://docs.tmodloader.net/docs/stable/"\n'
	"# cache_ttl_seconds = 3600\n"
	"# request_timeout = 30.0\n"
	'# content_selectors = [".contents", ".textblock", "body"]\n'
)


def _detect_claude_code_config() -> Path:
	"""Detect Claude Code MCP settings file."""
	home = Path.home()
	candidates = [
		home / ".claude" / "claude_code_config.json",
		home / ".claude.json",
	]
	for path in candidates:
		if path.exists():
			return path
	# Default location even if it doesn't exist yet
	return home / ".claude" / "claude_code_config.json"


def _detect_claude_desktop_config() -> Path | None:
	"""Detect Claude Desktop MCP settings file."""
	system = platform.system()
	home = Path.home()
	if system == "Darwin":
		path = home / "Library" / "Application Support" / "Claude" / "claude_desktop_config.json"
	elif system == "Linux":
		path = home / ".config" / "Claude" / "claude_desktop_config.json"
	elif system == "Windows":
		appdata = os.getenv("APPDATA", "")
		if appdata:
			path = Path(appdata) / "Claude" / "claude_desktop_config.json"
		else:
			return None
	else:
		return None
	return path if path.exists() else None


def _inject_mcp_config(config_path: Path) -> bool:
	"""Inject the tmodloader-docs entry into an MCP config file."""
	try:
		if config_path.exists():
			with open(config_path) as f:
				data = json.load(f)
		else:
			data = {}

		if "mcpServers" not in data:
			data["mcpServers"] = {}

		if SERVER_NAME in data["mcpServers"]:
			print(f"  Already configured in {config_path}")
			return True

		data["mcpServers"][SERVER_NAME] = MCP_ENTRY
		config_path.parent.mkdir(parents=True, exist_ok=True)
		with open(config_path, "w") as f:
			json.dump(data, f, indent=2)
		print(f"  Added to {config_path}")
		return True
	except (json.JSONDecodeError, IOError) as e:
		print(f"  Failed to update {config_path}: {e}")
		return False


def cmd_setup(args: argparse.Namespace) -> None:
	"""Write a default config and register the server with Claude clients."""
	if args.check:
		cmd_setup_check()
		return

	print("tmodloader-docs setup")
	print(f"{'=' * 40}")
	print()

	config = load_config()
	print("[1/3] Directories")
	print(f"  Config: {config.config_dir}")
	print(f"  Logs:   {config.log_dir}")
	print()

	toml_path = config.config_dir / "config.toml"
	if not toml_path.exists():
		toml_path.write_text(DEFAULT_CONFIG_TOML)
		print(f"[2/3] Config file created: {toml_path}")
	else:
		print(f"[2/3] Config file exists: {toml_path}")
	print()

	print("[3/3] MCP configuration")
	claude_code = _detect_claude_code_config()
	print(f"  Claude Code config: {claude_code}")
	response = input("  Add tmodloader-docs to Claude Code? [Y/n] ").strip().lower()
	if response in ("", "y", "yes"):
		_inject_mcp_config(claude_code)

	claude_desktop = _detect_claude_desktop_config()
	if claude_desktop:
		print(f"  Claude Desktop config: {claude_desktop}")
		response = input("  Add tmodloader-docs to Claude Desktop? [Y/n] ").strip().lower()
		if response in ("", "y", "yes"):
			_inject_mcp_config(claude_desktop)
	else:
		print("  Claude Desktop config: not detected")
	print()
	print("  Restart Claude Code / Claude Desktop to load the MCP server")


def cmd_setup_check() -> None:
	"""Check current configuration status."""
	print("tmodloader-docs config check")
	print(f"{'=' * 40}")
	print()

	config = load_config()
	toml_path = config.config_dir / "config.toml"
	checks = [
		("Config dir", config.config_dir, config.config_dir.exists()),
		("Log dir", config.log_dir, config.log_dir.exists()),
		("Config file", toml_path, toml_path.exists()),
	]
	for label, path, exists in checks:
		status = "OK" if exists else "MISSING"
		print(f"  [{status:7s}] {label}: {path}")
	print()
	print(f"  Index URL:  {config.index_url}")
	print(f"  Cache TTL:  {config.cache_ttl_seconds:.0f}s")


def _check_config_toml(config_dir: Path) -> tuple[str, str | None]:
	"""Validate config.toml. Returns (status, issue_or_none)."""
	import tomllib

	toml_path = config_dir / "config.toml"
	if not toml_path.exists():
		return "not found (optional)", None
	try:
		with open(toml_path, "rb") as f:
			tomllib.load(f)
		return "valid", None
	except tomllib.TOMLDecodeError as e:
		msg = f"config.toml parse error: {e}"
		return f"INVALID ({e})", msg


def _check_server_startup() -> tuple[str, str | None]:
	"""Try building the server and counting registered tools. Returns (status, issue_or_none)."""
	try:
		from .server import create_server
		server_instance = create_server()
		# FastMCP stores tools internally - count them
		count = len(server_instance._tool_manager._tools)
		return f"OK ({count} tools registered)", None
	except Exception as e:
		return f"FAILED ({e})", f"Server startup failed: {e}"


def cmd_doctor(args: argparse.Namespace) -> None:
	"""Health check - verify installation and configuration."""
	print("tmodloader-docs doctor")
	print(f"{'=' * 40}")

	config = load_config()
	issues: list[str] = []

	py_ver = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
	print(f"  Python:       {py_ver}")
	print(f"  Platform:     {platform.system()} {platform.machine()}")
	print()

	print("  Core deps:")
	core_deps = ["mcp", "aiohttp", "beautifulsoup4", "markdownify", "platformdirs"]
	for dep in core_deps:
		try:
			dep_ver = pkg_version(dep)
			print(f"    {dep:22s} {dep_ver}")
		except Exception:
			print(f"    {dep:22s} NOT INSTALLED")
			issues.append(f"{dep} package not installed")
	print()

	print("  Config:")
	toml_status, toml_issue = _check_config_toml(config.config_dir)
	print(f"    config.toml:         {toml_status}")
	if toml_issue:
		issues.append(toml_issue)
	print(f"    index URL:           {config.index_url}")
	print()

	print("  Server:")
	server_status, server_issue = _check_server_startup()
	print(f"    {server_status}")
	if server_issue:
		issues.append(server_issue)
	print()

	claude_code = _detect_claude_code_config()
	if claude_code.exists():
		try:
			with open(claude_code) as f:
				data = json.load(f)
			has_entry = SERVER_NAME in data.get("mcpServers", {})
			status = "configured" if has_entry else "not configured"
			print(f"  Claude Code:  {status}")
			if not has_entry:
				issues.append("tmodloader-docs not in Claude Code MCP config")
		except (json.JSONDecodeError, IOError):
			print("  Claude Code:  config file unreadable")
	else:
		print("  Claude Code:  config not found")

	print()
	if issues:
		print(f"  {len(issues)} issue(s) found:")
		for issue in issues:
			print(f"    - {issue}")
		sys.exit(1)
	else:
		print("  All checks passed.")


def cmd_serve(args: argparse.Namespace) -> None:
	"""Run the MCP server (stdio transport)."""
	config = load_config()
	setup_logging(level=args.log_level, log_dir=config.log_dir)
	try:
		from .server import create_server
		mcp = create_server(config)
		logger.info("tModLoader Docs MCP Server running on stdio")
		mcp.run()
	except Exception:
		logger.exception("Fatal error running server")
		sys.exit(1)


def cmd_search(args: argparse.Namespace) -> None:
	"""Search the class catalog once and print the matches."""
	from .docs import DocsService
	from .tools.docs import format_search_results

	config = load_config()
	setup_logging(level=args.log_level)
	service = DocsService.from_config(config)
	try:
		results = asyncio.run(service.search(args.query))
	except DocsError as e:
		print(f"Error searching classes: {e}", file=sys.stderr)
		sys.exit(1)
	print(format_search_results(results))


def cmd_read(args: argparse.Namespace) -> None:
	"""Fetch one class page and print it as markdown."""
	from .docs import DocsService

	config = load_config()
	setup_logging(level=args.log_level)
	service = DocsService.from_config(config)
	try:
		markdown = asyncio.run(service.fetch_docs(args.url))
	except DocsError as e:
		print(f"Error fetching docs: {e}", file=sys.stderr)
		sys.exit(1)
	print(markdown)


def build_parser() -> argparse.ArgumentParser:
	"""Build the argument parser with all subcommands."""
	parser = argparse.ArgumentParser(
		prog="tmodloader-docs",
		description="MCP server for searching and reading the tModLoader API documentation",
	)
	parser.add_argument(
		"--log-level",
		type=str,
		default=None,
		help="Log level (DEBUG, INFO, WARNING, ERROR); defaults to $LOG_LEVEL or INFO",
	)
	subparsers = parser.add_subparsers(dest="command")

	# setup
	setup_parser = subparsers.add_parser("setup", help="Write config and register with Claude clients")
	setup_parser.add_argument("--check", action="store_true", help="Check current config")
	setup_parser.set_defaults(func=cmd_setup)

	# serve
	serve_parser = subparsers.add_parser("serve", help="Run MCP server (stdio)")
	serve_parser.set_defaults(func=cmd_serve)

	# doctor
	doctor_parser = subparsers.add_parser("doctor", help="Health check")
	doctor_parser.set_defaults(func=cmd_doctor)

	# search
	search_parser = subparsers.add_parser("search", help="Search tModLoader classes")
	search_parser.add_argument("query", type=str, help="Substring of a class name or full name")
	search_parser.set_defaults(func=cmd_search)

	# read
	read_parser = subparsers.add_parser("read", help="Print a class documentation page as markdown")
	read_parser.add_argument("url", type=str, help="Class page URL (as printed by search)")
	read_parser.set_defaults(func=cmd_read)

	return parser


def main() -> None:
	"""CLI entry point."""
	parser = build_parser()
	args = parser.parse_args()

	if not args.command:
		parser.print_help()
		sys.exit(1)

	args.func(args)
