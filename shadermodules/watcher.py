import sys
from pathlib import Path
from .loader import library_directories, reload_library

try:
    from watchdog.observers import Observer
    from watchdog.events import FileSystemEventHandler
    WATCHDOG_AVAILABLE = True
except ImportError:
    WATCHDOG_AVAILABLE = False

# Opened/closed events are ignored, loading the library itself produces them.
RELOAD_EVENTS = ("modified", "created", "deleted", "moved")


class LibraryWatcher:
    """
    Reloads the shader library whenever a .glsl file in one of its
    directories changes.
    """
    def __init__(self, directories=None, on_reload=None, verbose=True):
        """
        Args:
            directories (list, optional): Directories to observe. Defaults to
                                          the library directories.
            on_reload (callable, optional): Called with the new registry after
                                            every successful reload.
            verbose (bool, optional): Print INFO lines to stderr.
        """
        self.directories = [Path(d) for d in (directories or library_directories())]
        self.on_reload = on_reload
        self.verbose = verbose
        self.observer = None
        self.reload_count = 0

    def reload(self, changed_path=None):
        """Reloads the library and notifies `on_reload`."""
        if self.verbose:
            name = Path(changed_path).name if changed_path else 'library'
            print(f"INFO: Change detected in '{name}'. Reloading shader modules...", file=sys.stderr)
        try:
            registry = reload_library()
        except Exception as e:
            print(f"ERROR: Failed to reload shader modules: {e}", file=sys.stderr)
            return None
        self.reload_count += 1
        if self.on_reload:
            self.on_reload(registry)
        return registry

    def start(self):
        """Starts observing in a daemon thread."""
        if self.observer is not None:
            return
        if not WATCHDOG_AVAILABLE:
            print("INFO: Hot-reloading disabled. `watchdog` not installed. Run 'pip install watchdog'.", file=sys.stderr)
            return
        class ChangeHandler(FileSystemEventHandler):
            def __init__(self, watcher): self.watcher = watcher
            def on_any_event(self, event):
                if event.is_directory or event.event_type not in RELOAD_EVENTS: return
                paths = [event.src_path, getattr(event, "dest_path", "")]
                if any(str(p).endswith(".glsl") for p in paths):
                    self.watcher.reload(event.src_path)

        observer = Observer()
        handler = ChangeHandler(self)
        for directory in self.directories:
            if directory.is_dir():
                observer.schedule(handler, str(directory), recursive=False)
        observer.daemon = True
        observer.start()
        self.observer = observer
        if self.verbose:
            watched = ", ".join(f"'{d}'" for d in self.directories)
            print(f"INFO: Watching {watched} for changes...", file=sys.stderr)

    def stop(self):
        if self.observer is None:
            return
        self.observer.stop()
        self.observer.join()
        self.observer = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
