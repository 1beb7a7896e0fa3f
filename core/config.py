"""
Configuration and State Management

Handles loading/saving config, keybindings and persistent browse state.
"""

import json
import time
from pathlib import Path
from typing import Any, Dict, Optional


DEFAULT_FEEDS: Dict[str, list] = {
    "home": [
        {"title": "Recommended", "url": "https://www.youtube.com/"},
        {"title": "Trending", "url": "https://www.youtube.com/feed/trending"},
    ],
    "gaming": [
        {"title": "Gaming", "url": "https://www.youtube.com/gaming"},
        {"title": "Live", "url": "ytsearch20:gaming live"},
    ],
    "news": [
        {
            "title": "Top stories",
            "url": "https://www.youtube.com/channel/UCYfdidRxbB8Qhf0Nx7ioOYw/videos",
        },
        {"title": "World", "url": "ytsearch20:world news today"},
    ],
    "music": [
        {
            "title": "Music",
            "url": "https://www.youtube.com/channel/UC-9-kyTW8ZkZNDHQJ6FgpwQ/videos",
        },
        {"title": "New releases", "url": "ytsearch20:new music video"},
    ],
    "subscriptions": [
        {"title": "Subscriptions", "url": ":ytsubs"},
    ],
    "history": [
        {"title": "History", "url": ":ythistory"},
    ],
    "playlists": [
        {"title": "Watch later", "url": ":ytwatchlater"},
        {"title": "Liked videos", "url": "https://www.youtube.com/playlist?list=LL"},
    ],
}


class ConfigManager:
    """Manages application configuration and persistent state."""

    def __init__(self, config_dir: str = "config"):
        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.config_file = self.config_dir / "default_config.json"
        self.state_file = self.config_dir / "state.json"
        self.keybindings_file = self.config_dir / "keybindings.json"

        self.config = {}
        self.state = {}
        self.keybindings = {}

        # Load everything
        self.load_config()
        self.load_state()
        self.load_keybindings()

    def load_config(self) -> Dict[str, Any]:
        """Load configuration from file."""
        if self.config_file.exists():
            with open(self.config_file, "r", encoding="utf-8") as f:
                self.config = json.load(f)
        else:
            # Create default config
            self.config = self._get_default_config()
            self.save_config()

        return self.config

    def save_config(self):
        """Save configuration to file."""
        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(self.config, f, indent=2)

    def load_state(self) -> Dict[str, Any]:
        """Load persistent state from file."""
        if self.state_file.exists():
            with open(self.state_file, "r", encoding="utf-8") as f:
                self.state = json.load(f)
        else:
            self.state = self._get_default_state()
            self.save_state()

        return self.state

    def save_state(self):
        """Save persistent state to file."""
        with open(self.state_file, "w", encoding="utf-8") as f:
            json.dump(self.state, f, indent=2)

    def load_keybindings(self) -> Dict[str, str]:
        """Load keybindings from file."""
        if self.keybindings_file.exists():
            with open(self.keybindings_file, "r", encoding="utf-8") as f:
                self.keybindings = json.load(f)
        else:
            self.keybindings = self._get_default_keybindings()
            self.save_keybindings()

        return self.keybindings

    def save_keybindings(self):
        """Save keybindings to file."""
        with open(self.keybindings_file, "w", encoding="utf-8") as f:
            json.dump(self.keybindings, f, indent=2)

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "browse": {
                "reload_period_minutes": 10,
                "restore_last_section": True,
            },
            "catalog": {
                "page_size": 20,
                "max_retries": 3,
                "feeds": json.loads(json.dumps(DEFAULT_FEEDS)),
            },
            "ui": {
                "language": "es",
                "pump_interval": 0.05,
            },
            "playback": {
                "volume": 80,
            },
        }

    def _get_default_state(self) -> Dict[str, Any]:
        """Get default state."""
        return {
            "last_section_id": None,
            "session_count": 0,
            "last_updated": time.time(),
        }

    def _get_default_keybindings(self) -> Dict[str, str]:
        """Get default keybindings."""
        return {
            "refresh": "r",
            "details": "i",
            "next_section": "tab",
            "stop_playback": "s",
            "quit": "q",
        }

    # Configuration getters
    def get(self, key: str, default: Any = None) -> Any:
        """Get config value by dot-notation key (e.g., 'catalog.page_size')."""
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """Set config value by dot-notation key."""
        keys = key.split(".")
        config = self.config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value
        self.save_config()

    # State management
    def get_state(self, key: str, default: Any = None) -> Any:
        """Get state value."""
        return self.state.get(key, default)

    # Keybinding helpers
    def get_key_for_action(self, action: str) -> Optional[str]:
        """Get the key bound to an action."""
        return self.keybindings.get(action)

    def get_action_for_key(self, key: str) -> Optional[str]:
        """Get the action bound to a key."""
        for action, bound_key in self.keybindings.items():
            if bound_key == key:
                return action
        return None

    # Browse helpers
    def reload_period_seconds(self) -> float:
        return float(self.get("browse.reload_period_minutes", 10)) * 60

    def feeds(self) -> Dict[str, list]:
        return self.get("catalog.feeds") or DEFAULT_FEEDS

    # Session management
    def start_session(self):
        """Start a new session."""
        self.state["session_count"] = self.state.get("session_count", 0) + 1
        self.state["session_start_time"] = time.time()
        self.save_state()

    def end_session(self, last_section_id: Optional[int] = None):
        """End current session, remembering the focused section."""
        self.state.pop("session_start_time", None)
        if last_section_id is not None:
            self.state["last_section_id"] = last_section_id
        self.save_state()
