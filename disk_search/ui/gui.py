import threading
import tkinter as tk
from tkinter import messagebox, ttk

from disk_search import __version__
from disk_search.utils.logger import get_logger
from disk_search.utils.system_utils import open_path

logger = get_logger("UI")


class SearchWindow:
    """Main window: a search box over the file name index"""

    def __init__(self, root, service, scheduler=None, log_path=None):
        self.root = root
        self.root.title("Disk Search")
        self.root.geometry("800x600")

        self.service = service
        self.scheduler = scheduler
        self.log_path = log_path

        self.status_var = tk.StringVar(value="Ready")
        self.search_var = tk.StringVar()
        self.search_in_progress = False
        self.rebuild_in_progress = False

        self._create_ui()

    def _create_ui(self):
        """Create the user interface"""
        main_frame = ttk.Frame(self.root, padding="10")
        main_frame.pack(fill=tk.BOTH, expand=True)

        # Menu bar
        menubar = tk.Menu(self.root)
        self.root.config(menu=menubar)

        file_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="File", menu=file_menu)
        file_menu.add_command(label="Rebuild Index Now", command=self._trigger_rebuild)
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self.on_close)

        help_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="Help", menu=help_menu)
        help_menu.add_command(label="View Log", command=self._view_log)
        help_menu.add_command(label="About", command=self._show_about)

        # Search bar
        search_frame = ttk.Frame(main_frame)
        search_frame.pack(fill=tk.X, pady=(0, 10))

        self.search_entry = ttk.Entry(search_frame, textvariable=self.search_var, width=40)
        self.search_entry.pack(side=tk.LEFT, fill=tk.X, expand=True)
        self.search_entry.bind("<Return>", self._perform_search)
        self.search_entry.focus_set()

        search_btn = ttk.Button(search_frame, text="Search", command=self._perform_search)
        search_btn.pack(side=tk.LEFT, padx=(5, 0))

        # Results list with scrollbar
        results_frame = ttk.LabelFrame(main_frame, text="Results")
        results_frame.pack(fill=tk.BOTH, expand=True)

        results_scroll = ttk.Scrollbar(results_frame)
        results_scroll.pack(side=tk.RIGHT, fill=tk.Y)

        self.results_list = ttk.Treeview(results_frame, columns=("Name", "Path"), show="headings")
        self.results_list.heading("Name", text="Name")
        self.results_list.heading("Path", text="Path")
        self.results_list.column("Name", width=200)
        self.results_list.column("Path", width=550)

        self.results_list.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        results_scroll.config(command=self.results_list.yview)
        self.results_list.config(yscrollcommand=results_scroll.set)

        self.results_list.bind("<Double-1>", self._open_selected_file)

        # Status bar
        status_frame = ttk.Frame(main_frame)
        status_frame.pack(fill=tk.X, pady=(10, 0))
        ttk.Label(status_frame, textvariable=self.status_var).pack(side=tk.LEFT)

    def _perform_search(self, event=None):
        """Run the query on a worker thread; the first one may build the index"""
        query = self.search_var.get().strip()
        if not query or self.search_in_progress:
            return

        self.search_in_progress = True
        self.status_var.set(f"Searching for: {query}")
        threading.Thread(target=self._background_search, args=(query,), daemon=True).start()

    def _background_search(self, query):
        try:
            results = self.service.search_files(query)
        except Exception as e:
            logger.exception(f"Search for {query!r} failed")
            self.root.after(0, self._show_search_error, e)
            return
        self.root.after(0, self._show_results, query, results)

    def _show_results(self, query, results):
        self.search_in_progress = False
        for item in self.results_list.get_children():
            self.results_list.delete(item)

        for filename, file_path in results:
            self.results_list.insert("", tk.END, values=(filename, file_path))

        self.status_var.set(f"Found {len(results)} results for '{query}'")

    def _show_search_error(self, error):
        self.search_in_progress = False
        self.status_var.set("Search failed")
        messagebox.showerror("Search Error", f"Search failed: {error}")

    def _open_selected_file(self, event=None):
        """Open the selected file with default application"""
        selection = self.results_list.selection()
        if not selection:
            return

        file_path = self.results_list.item(selection[0], "values")[1]
        try:
            open_path(file_path)
        except OSError as e:
            logger.error(f"Error opening file {file_path}: {e}")
            messagebox.showerror("Error", f"Could not open file: {e}")

    def _trigger_rebuild(self):
        """Start a full rebuild outside the refresh schedule"""
        if self.scheduler is None:
            return
        if self.rebuild_in_progress:
            messagebox.showinfo("Indexing", "Indexing is already in progress")
            return

        confirm = messagebox.askyesno(
            "Confirm Rebuild", "This will scan the whole indexed folder. Continue?"
        )
        if confirm:
            self.rebuild_in_progress = True
            self.status_var.set("Indexing in progress...")
            threading.Thread(target=self._background_rebuild, daemon=True).start()

    def _background_rebuild(self):
        ok = self.scheduler.run_cycle()
        self.root.after(0, self._rebuild_finished, ok)

    def _rebuild_finished(self, ok):
        self.rebuild_in_progress = False
        if ok:
            entries = self.service.stats()["entries"]
            self.status_var.set(f"Indexing complete - {entries} entries indexed")
        else:
            self.status_var.set("Indexing failed, see log for details")

    def _show_about(self):
        stats = self.service.stats()
        messagebox.showinfo(
            "About Disk Search",
            f"Disk Search v{__version__}\n\n"
            "A local file name indexing and searching tool.\n\n"
            f"Index file: {stats['index_path']}\n"
            f"Last refresh: {stats['last_refresh'] or 'not yet'}",
        )

    def _view_log(self):
        """Open log file in default text editor"""
        if self.log_path and self.log_path.exists():
            try:
                open_path(str(self.log_path))
            except OSError as e:
                messagebox.showerror("Error", f"Could not open log file: {e}")
        else:
            messagebox.showinfo("Log", "Log file does not exist yet")

    def on_close(self):
        """Handle application closing"""
        if self.scheduler:
            self.scheduler.stop(timeout=2.0)
        self.root.destroy()
