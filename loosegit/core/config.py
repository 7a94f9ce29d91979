"""Configuration management for loosegit.

This module provides a read-only view over the repository-local and
global configuration files, with environment variable overrides.
"""

import configparser
import os
from pathlib import Path
from typing import Optional

DEFAULT_LOG_LEVEL = 'WARNING'
DEFAULT_SYMREF_DEPTH = 5

_TRUE = ('1', 'true', 'yes', 'on')
_FALSE = ('0', 'false', 'no', 'off')


class Config:
    """
    Reads loosegit configuration.
    
    Configuration is stored in INI format, like Git:
    - Global config: ~/.loosegitconfig
    - Repository config: <gitdir>/config
    
    Repository config takes precedence over global config.
    Environment variables take highest precedence.
    """
    
    GLOBAL_CONFIG_PATH = Path.home() / '.loosegitconfig'
    
    def __init__(self, repo_config_text: Optional[str] = None,
                 global_config_path: Optional[Path] = None):
        """
        Initialize Config.
        
        Args:
            repo_config_text: Content of the repository config file, if any
            global_config_path: Override for the global config location
        """
        self.repo_config_text = repo_config_text
        self.global_config_path = global_config_path or self.GLOBAL_CONFIG_PATH
        self._global_config = None
        self._repo_config = None
    
    @classmethod
    def from_gitdir(cls, gitdir, **kwargs) -> 'Config':
        """
        Load the config file of a repository.
        
        Args:
            gitdir: GitDir whose <root>/config is read, if present
        """
        path = gitdir.fs.join(gitdir.path, 'config')
        try:
            with gitdir.fs.open(path) as f:
                text = f.read().decode('utf-8', errors='replace')
        except FileNotFoundError:
            text = None
        return cls(text, **kwargs)
    
    @staticmethod
    def _parser() -> configparser.ConfigParser:
        # Git config allows keys without values and repeated keys
        return configparser.ConfigParser(allow_no_value=True, strict=False,
                                         interpolation=None)
    
    @property
    def global_config(self) -> configparser.ConfigParser:
        """Load and return global configuration."""
        if self._global_config is None:
            self._global_config = self._parser()
            if self.global_config_path.exists():
                self._global_config.read(self.global_config_path)
        return self._global_config
    
    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Load and return repository configuration."""
        if self._repo_config is None and self.repo_config_text is not None:
            self._repo_config = self._parser()
            self._repo_config.read_string(self.repo_config_text)
        return self._repo_config
    
    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.
        
        Priority order (highest to lowest):
        1. Environment variables (LOOSEGIT_<SECTION>_<KEY>)
        2. Repository config
        3. Global config
        4. Fallback value
        
        Args:
            section: Config section (e.g., 'core', 'log')
            key: Config key (e.g., 'lenientzlib')
            fallback: Default value if not found
            
        Returns:
            Configuration value or fallback
        """
        env_key = f"LOOSEGIT_{section.upper()}_{key.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return env_value
        
        if self.repo_config and self.repo_config.has_option(section, key):
            return self.repo_config.get(section, key)
        
        if self.global_config.has_option(section, key):
            return self.global_config.get(section, key)
        
        return fallback
    
    def get_bool(self, section: str, key: str, fallback: bool = False) -> bool:
        """
        Get a boolean value.
        
        A key present without a value counts as true, as in Git.
        
        Raises:
            ValueError: If the value is not a recognised boolean
        """
        sentinel = object()
        value = self.get(section, key, sentinel)
        if value is sentinel:
            return fallback
        if value is None:
            return True
        
        value = value.strip().lower()
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
        raise ValueError(f"Invalid boolean for {section}.{key}: {value!r}")
    
    def get_int(self, section: str, key: str, fallback: int = 0) -> int:
        """
        Get an integer value.
        
        Raises:
            ValueError: If the value is not an integer
        """
        value = self.get(section, key)
        if value is None:
            return fallback
        try:
            return int(value.strip())
        except ValueError:
            raise ValueError(f"Invalid integer for {section}.{key}: {value!r}")
    
    @property
    def lenient_zlib(self) -> bool:
        return self.get_bool('core', 'lenientzlib', True)
    
    @property
    def symref_depth(self) -> int:
        return self.get_int('core', 'symrefdepth', DEFAULT_SYMREF_DEPTH)
    
    @property
    def log_level(self) -> str:
        return self.get('log', 'level', DEFAULT_LOG_LEVEL).upper()
