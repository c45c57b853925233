from typing import Self
from pathlib import Path
from dataclasses import dataclass, fields

__all__ = ['Config', 'default_config']

SECTION = 'swollencandle'


@dataclass(kw_only=True, slots=True)
class Config:
    """
    Library settings

    The line estimation is only used to pre-allocate the output buffer, the results never depend on it.
    Settings are stored in TOML format under a ``[swollencandle]`` table.
    """
    write_line_estimation: int = 72
    """ Estimated bytes per row reserved in the writer """

    log_level: str = 'WARNING'
    color_log: bool = True

    @classmethod
    def load_toml(cls, path: Path) -> Self:
        """
        Load Config object from TOML file.

        :param path: Path to the TOML file
        :return: Config instance
        :raises ValueError: If the section is missing or a value has the wrong type
        """
        import tomllib

        with open(path, 'rb') as f:
            data = tomllib.load(f)

        if SECTION not in data:
            raise ValueError(f"Missing [{SECTION}] section in TOML")

        section = data[SECTION]
        kwargs = {}
        for field in fields(cls):
            if field.name not in section:
                continue
            value = section[field.name]
            expected = type(field.default)
            # bool is a subclass of int, it must not pass as an estimation
            if type(value) is not expected:
                raise ValueError(f"Invalid value for '{field.name}': {value!r}")
            kwargs[field.name] = value

        config = cls(**kwargs)
        if config.write_line_estimation <= 0:
            raise ValueError("'write_line_estimation' must be positive")
        return config

    def save_toml(self, path: Path):
        """
        Save Config object to TOML fmt without dependencies.

        :param path: Path to save the file
        """

        def format_field(key, value):
            """Format field to TOML string"""
            if isinstance(value, bool):
                return f"{key} = {str(value).lower()}"
            if isinstance(value, str):
                value = value.replace('\\', '\\\\').replace('"', '\\"')
                return f"{key} = \"{value}\""
            return f"{key} = {value}"

        lines = [f"[{SECTION}]"]
        for field in fields(self):
            lines.append(format_field(field.name, getattr(self, field.name)))

        with open(path, 'w', encoding='utf-8') as f:
            f.write('\n'.join(lines) + '\n')


default_config = Config()
