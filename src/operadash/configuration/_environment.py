from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class Environment:
    """Connection settings for one engine environment."""

    url: str
    username: str = ''
    password: str = ''
    ui_color: str = ''  # curses colour name or "#RRGGBB"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Environment':
        return cls(
            url=str(data.get('url', '')),
            username=str(data.get('username') or ''),
            password=str(data.get('password') or ''),
            ui_color=str(data.get('ui_color') or ''),
        )

    def to_dict(self) -> dict:
        return {'url': self.url, 'username': self.username, 'password': self.password, 'ui_color': self.ui_color}
