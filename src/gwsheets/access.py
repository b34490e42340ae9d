from collections.abc import Iterable
from dataclasses import dataclass, field, asdict
from pathlib import Path
import json
import logging

import google.auth
import google.auth.exceptions
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build, Resource

logger = logging.getLogger(__name__)

SCOPES = {
    "sheets": "https://www.googleapis.com/auth/spreadsheets",
    "sheets-ro": "https://www.googleapis.com/auth/spreadsheets.readonly",
    "drive-file": "https://www.googleapis.com/auth/drive.file",
    "drive": "https://www.googleapis.com/auth/drive",
    "drive-ro": "https://www.googleapis.com/auth/drive.readonly",
}
_SCOPE_URL_PREFIX = "https://www.googleapis.com/"

_DEFAULT_DIR = Path.home() / ".google"

def get_scope(scope: str) -> str:
    """
    Get a scope based on simplified label.
    A raw URL will also be accepted, anything else gives an empty string.
    """
    s = str(scope)
    sc = SCOPES.get(s, "")
    if not sc and s.startswith(_SCOPE_URL_PREFIX):
        sc = s
    return sc

def _scope_list(value: str|Iterable[str]|None) -> list[str]:
    if value is None:
        return []
    vals = [value] if isinstance(value, str) else value
    scopes = []
    for v in vals:
        s = get_scope(v)
        if not s:
            raise ValueError(f"Unknown scope: {v}")
        if s not in scopes:
            scopes.append(s)
    return scopes

@dataclass
class AccessConfig():
    """
    Everything needed to get authorized access, so it can live in a file.

    secrets:    Client secrets file as downloaded from the Google Cloud console.
    cache:      Where the authorized user token is kept between runs.
    scopes:     Short names ('sheets', 'drive-file', ...) or full scope URLs.
    server/port: Local redirect server for the installed app flow, port 0 picks one.
    developer_key: Optional API key passed to the service build.
    """
    secrets: Path = field(default=_DEFAULT_DIR / "credentials.json")
    cache: Path = field(default=_DEFAULT_DIR / "token.json")
    scopes: list[str] = field(default_factory=lambda: [SCOPES["sheets"]])
    server: str = field(default="localhost")
    port: int = field(default=0)
    developer_key: str|None = field(default=None)
    auth_prompt_msg: str = field(default="Please visit this URL to authorize access: {url}")
    auth_flow_success_msg: str = field(default="Authorization complete, you may close this window.")

    def __post_init__(self) -> None:
        self.secrets = Path(self.secrets).expanduser()
        self.cache = Path(self.cache).expanduser()
        self.scopes = _scope_list(self.scopes)
        self.port = int(self.port)

    @classmethod
    def from_dict(cls, config: dict) -> "AccessConfig":
        """Unknown keys are ignored so a config file can carry other sections"""
        known = {k: v for k, v in dict(config).items()
                 if k in cls.__dataclass_fields__ and v is not None}
        return cls(**known)

    @classmethod
    def from_file(cls, path: Path|str) -> "AccessConfig":
        """JSON config file, relative secrets/cache paths are taken from the file's directory"""
        p = Path(path).expanduser()
        with open(p, 'r', encoding='utf-8') as f:
            config = json.load(f)
        for key in ('secrets', 'cache'):
            if config.get(key) and not Path(config[key]).expanduser().is_absolute():
                config[key] = p.parent / config[key]
        return cls.from_dict(config)

    def to_dict(self) -> dict:
        d = asdict(self)
        d['secrets'] = str(self.secrets)
        d['cache'] = str(self.cache)
        return d

class GWSAccess():
    """
    Authorized access to the Google APIs.
    See https://developers.google.com/workspace/guides/create-credentials#choose_the_access_credential_that_is_right_for_you
    for an overview of what you'll need.  Once you've obtained a secrets file point the
    config at it.  The first connect triggers the OAuth consent screens, after that the token
    is cached and refreshed so confirmation does not need to happen repeatedly.
    Without a secrets file application default credentials are tried.

    Create one and hand services from it to whatever needs them, there is no global instance.
    """
    def __init__(self, config: AccessConfig|dict|None = None) -> None:
        self._config = AccessConfig()
        self._creds = None
        self._services = {}
        if config is not None:
            self.config = config

    def __bool__(self) -> bool:
        """True is we are connected and authenticated"""
        return self.connected

    def __str__(self) -> str:
        if self.connected:
            return f"Connected:{str(self.session_scopes)}"
        return f"Disconnected:{str(self._config.scopes)}"

    def __repr__(self) -> str:
        return f"{str(self.__class__)}:{str(self)}"

    @property
    def config(self) -> AccessConfig:
        return self._config

    @config.setter
    def config(self, config: AccessConfig|dict) -> None:
        """
        Replacing the config drops the current session since the
        credentials may no longer match.
        """
        self._config = config if isinstance(config, AccessConfig) else AccessConfig.from_dict(config)
        self.clear()

    @property
    def scopes(self) -> list[str]:
        """The scopes requested or to be requested on next authentication sequence."""
        return list(self._config.scopes)

    @property
    def connected(self) -> bool:
        """Are we authenticated with Google?"""
        return self._creds is not None and bool(self._creds.valid)

    @property
    def session_scopes(self) -> list[str]:
        """
        Scopes authenticated by Google for this session.
        This differs to self.scopes as that is what is requested or to be requested.
        """
        if self.connected:
            return list(self._creds.scopes or [])
        return []

    @property
    def creds(self) -> Credentials|None:
        return self._creds

    def clear(self) -> None:
        """Reset the session state, the config is kept."""
        self._creds = None
        self._services = {}

    def append_scopes(self, *scopes: str) -> bool:
        """
        Add to the requested scopes, reconnecting if the current session doesn't cover them.
        """
        for s in _scope_list(list(scopes)):
            if s not in self._config.scopes:
                self._config.scopes.append(s)
        if self.connected and not all(s in self.session_scopes for s in self._config.scopes):
            return self.connect()
        return True

    def _load_cached(self, requested: list[str]) -> Credentials|None:
        cache = self._config.cache
        if not cache.is_file():
            return None
        with open(cache, 'r', encoding='utf-8') as f:
            cached_scopes = json.load(f).get('scopes', [])
        if not all(s in cached_scopes for s in requested):
            logger.info("cached token at %s lacks requested scopes, re-authorizing", cache)
            cache.unlink()
            return None
        return Credentials.from_authorized_user_file(str(cache), requested)

    def _save_cached(self, requested: list[str]) -> None:
        if not isinstance(self._creds, Credentials) or not self._creds.refresh_token:
            # default credentials manage themselves
            return
        user_info = {'refresh_token': self._creds.refresh_token, 'client_id': self._creds.client_id,
                     'client_secret': self._creds.client_secret, 'scopes': requested}
        self._config.cache.parent.mkdir(parents=True, exist_ok=True)
        with open(self._config.cache, 'w', encoding='utf-8') as f:
            json.dump(user_info, f, ensure_ascii=False, indent=2)

    def connect(self) -> bool:
        """
        Establish a new authentication session: cached token, refreshed if
        expired, then the installed app flow if there is a secrets file, then
        application default credentials.
        If successful the token is saved to the cache to reuse next time.
        """
        self.clear()
        requested = list(self._config.scopes)
        if not requested:
            raise ValueError("connect() needs at least one scope")

        self._creds = self._load_cached(requested)
        if self._creds is not None and not self._creds.valid and self._creds.refresh_token:
            try:
                self._creds.refresh(Request())
            except google.auth.exceptions.RefreshError as e:
                logger.warning("failed to refresh stored creds: %s, re-authorizing", e)
                self._config.cache.unlink(missing_ok=True)
                self._creds = None

        if not self.connected:
            if self._config.secrets.is_file():
                logger.info("starting authorization flow with %s", self._config.secrets)
                flow = InstalledAppFlow.from_client_secrets_file(str(self._config.secrets), requested)
                self._creds = flow.run_local_server(host=self._config.server, port=self._config.port,
                                                    authorization_prompt_message=self._config.auth_prompt_msg,
                                                    success_message=self._config.auth_flow_success_msg)
            else:
                # this will look at the GOOGLE_APPLICATION_CREDENTIALS envvar and
                # other cloud default locations, raising if there's nothing
                logger.info("no client secrets at %s, using application default credentials",
                            self._config.secrets)
                self._creds, _ = google.auth.default(scopes=requested)
                if not self._creds.valid:
                    self._creds.refresh(Request())

        if self.connected:
            self._save_cached(requested)
        return self.connected

    def get_service(self, name: str = "sheets", version: str = "v4") -> Resource:
        """
        Build the requested service if not already available, connecting if required.
        """
        if not self.connected:
            self.connect()
        if not self.connected:
            raise google.auth.exceptions.DefaultCredentialsError("unable to obtain valid credentials")
        id = f'{name}:{version}'
        s = self._services.get(id)
        if s is None:
            logger.debug("building %s service", id)
            s = build(name, version, credentials=self._creds,
                      developerKey=self._config.developer_key, cache_discovery=False)
            self._services[id] = s
        return s
