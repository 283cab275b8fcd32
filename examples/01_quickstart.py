#!/usr/bin/env python3
"""Example: Quickstart — hostplug

Register a plugin, create a host, use the plugin, destroy the host.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install hostplug
"""
from __future__ import annotations

import hostplug


class Document(hostplug.LifecycleHost):
    def __init__(self, title: str) -> None:
        self.title = title
        self.words: list[str] = []
        super().__init__()


class WordCount(hostplug.BasePlugin):
    def count(self) -> int:
        return len(self.host.words)

    def destroy(self) -> None:
        print(f"  WordCount for {self.host.title!r} destroyed")
        super().destroy()


def main() -> None:
    print(f"hostplug version: {hostplug.__version__}")

    # Step 1: Register the plugin before any host exists
    hostplug.register_plugin("wordCount", WordCount)
    print(f"Registered plugins: {hostplug.get_plugin_names()}")

    # Step 2: Constructing a host attaches every registered plugin
    doc = Document("notes")
    doc.words.extend("the quick brown fox".split())
    print(f"Plugins on {doc.title!r}: {hostplug.get_registered_plugin_names(doc)}")

    # Step 3: Look the plugin up; the first letter of the name is case-insensitive
    counter = hostplug.get_plugin(doc, "WordCount")
    print(f"Word count: {counter.count()}")
    print(f"Reverse lookup: {hostplug.get_plugin_name(doc, counter)}")

    # Step 4: Destroying the host destroys and forgets its plugins
    doc.destroy()
    print(f"After destroy: {hostplug.get_plugin(doc, 'wordCount')}")


if __name__ == "__main__":
    main()
