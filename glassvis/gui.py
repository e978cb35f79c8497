"""Glassvis GUI.

Tkinter front end for the diff pipeline:
- Reference / captured image loading (prepared to the display size)
- Camera capture
- Diff with significance slider and bounding box switch
- Zoom in / out / fit, rulers, click position readout
- Defect rate info bar and CSV result log

All per-window state lives in an InspectionSession owned by the app.
"""
import os
import threading
import tkinter as tk
from tkinter import ttk, filedialog, messagebox

from PIL import Image, ImageTk

from .analysis import init_log_file, log_result
from .camera import capture_frame
from .config import MAX_SIGNIFICANCE, MIN_SIGNIFICANCE, GlassvisConfig, get_default_config
from .errors import GlassvisError
from .io import IMAGE_EXTS
from .pipeline import prepare_image, run_diff_files
from .session import InspectionSession


RULER_SIZE = 24
RULER_BG = "#B3CCE6"


def run_diff_job(schedule, on_done, on_failed, *args, **kwargs):
    """Run run_diff_files off the UI thread and hand the outcome to schedule().

    Every failure goes to on_failed, so the caller always hears back.
    """
    try:
        result = run_diff_files(*args, **kwargs)
    except Exception as e:
        print(f"Error in diff thread: {e}")
        schedule(on_failed, e)
    else:
        schedule(on_done, result)


class InspectorApp(tk.Tk):
    """Glassvis main window."""

    BG_COLOR = "#1E1E1E"
    FG_COLOR = "#E0E0E0"
    INFO_COLOR = "#00FFFF"
    ERROR_COLOR = "#FF4444"
    FONT_FACE = "Consolas"

    def __init__(self, config: GlassvisConfig = None):
        super().__init__()

        self.app_config = config if config is not None else get_default_config()
        self.session = InspectionSession(
            significance=self.app_config.diff.significance,
            draw_bounding_box=self.app_config.diff.draw_bounding_box
        )

        self.title("Glassvis")
        self.geometry("1280x800")
        self.configure(bg=self.BG_COLOR)

        # Display sizes of the two views, None means natural size
        self._ref_size = None
        self._capt_size = None
        self._diff_running = False

        self.log_file = self.app_config.display.log_file
        init_log_file(self.log_file)

        self._setup_styles()
        self._build_ui()
        self.protocol("WM_DELETE_WINDOW", self.on_closing)

    def _setup_styles(self):
        style = ttk.Style()
        style.theme_use('clam')

        style.configure("TLabel", background=self.BG_COLOR, foreground=self.FG_COLOR,
                        font=(self.FONT_FACE, 10))
        style.configure("TButton", background="#333333", foreground=self.FG_COLOR,
                        font=(self.FONT_FACE, 10, 'bold'))
        style.configure("TFrame", background=self.BG_COLOR)
        style.configure("TCheckbutton", background=self.BG_COLOR, foreground=self.FG_COLOR)

    # === LAYOUT ===

    def _build_ui(self):
        self._build_header()
        self._build_settings_panel()
        self._build_info_bar()
        self._build_display_area()

    def _build_header(self):
        header = self.header = ttk.Frame(self)
        header.pack(side=tk.TOP, fill=tk.X, padx=5, pady=5)

        buttons = [
            ("Reference", self._load_reference),
            ("Captured", self._load_captured),
            ("Camera", self._capture_from_camera),
            ("Diff", self._run_diff),
            ("Zoom +", self._zoom_in),
            ("Zoom -", self._zoom_out),
            ("Fit", self._zoom_fit),
            ("Settings", self._toggle_settings),
        ]
        for text, command in buttons:
            ttk.Button(header, text=text, command=command).pack(side=tk.LEFT, padx=2)

        ttk.Button(header, text="Quit", command=self.on_closing).pack(side=tk.RIGHT, padx=2)
        ttk.Button(header, text="Fullscreen", command=self._toggle_fullscreen).pack(side=tk.RIGHT, padx=2)
        ttk.Button(header, text="About", command=self._show_about).pack(side=tk.RIGHT, padx=2)

    def _build_settings_panel(self):
        self.settings_panel = ttk.Frame(self)

        ttk.Label(self.settings_panel, text="Defect significance").grid(row=0, column=0, padx=5, sticky=tk.W)
        self.significance_var = tk.IntVar(value=self.session.significance)
        tk.Scale(self.settings_panel, from_=MIN_SIGNIFICANCE, to=MAX_SIGNIFICANCE,
                 orient=tk.HORIZONTAL, length=300, variable=self.significance_var,
                 bg=self.BG_COLOR, fg=self.FG_COLOR, highlightthickness=0).grid(row=0, column=1, padx=5)

        self.bounding_var = tk.BooleanVar(value=self.session.draw_bounding_box)
        ttk.Checkbutton(self.settings_panel, text="Bounding box",
                        variable=self.bounding_var).grid(row=0, column=2, padx=10)

    def _build_info_bar(self):
        self.info_bar = tk.Frame(self, bg="#222222")
        self.info_bar.pack(side=tk.BOTTOM, fill=tk.X)

        self.defect_info = tk.Label(self.info_bar, text="Ready", bg="#222222", fg=self.FG_COLOR,
                                    font=(self.FONT_FACE, 10), anchor=tk.W)
        self.defect_info.pack(side=tk.LEFT, padx=5)

        self.position_info = tk.Label(self.info_bar, text="", bg="#222222", fg=self.INFO_COLOR,
                                      font=(self.FONT_FACE, 10), anchor=tk.E)
        self.position_info.pack(side=tk.RIGHT, padx=5)

    def _build_display_area(self):
        display = tk.Frame(self, bg=self.BG_COLOR)
        display.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=5, pady=5)

        self.top_ruler = tk.Canvas(display, height=RULER_SIZE, bg=RULER_BG, highlightthickness=0)
        self.top_ruler.grid(row=0, column=0, columnspan=2, sticky="ew")
        self.top_ruler.bind("<Configure>", lambda e: self._draw_top_ruler())

        self.right_ruler = tk.Canvas(display, width=RULER_SIZE, bg=RULER_BG, highlightthickness=0)
        self.right_ruler.grid(row=1, column=2, sticky="ns")
        self.right_ruler.bind("<Configure>", lambda e: self._draw_right_ruler())

        self.ref_label = tk.Label(display, bg="#111111", anchor=tk.NW)
        self.ref_label.grid(row=1, column=0, sticky="nsew", padx=1)
        self.ref_label.bind("<Button-1>", self._on_image_click)

        self.capt_label = tk.Label(display, bg="#111111", anchor=tk.NW)
        self.capt_label.grid(row=1, column=1, sticky="nsew", padx=1)
        self.capt_label.bind("<Button-1>", self._on_image_click)

        display.columnconfigure(0, weight=1)
        display.columnconfigure(1, weight=1)
        display.rowconfigure(1, weight=1)

    # === RULERS ===

    def _draw_top_ruler(self):
        canvas = self.top_ruler
        canvas.delete("all")
        width = canvas.winfo_width()
        height = canvas.winfo_height()

        for x in range(0, width + 1, 4):
            if x % 40 == 0:
                canvas.create_line(x, 0, x, height / 2, fill="#1A1A1A", width=1)
            elif x % 20 == 0:
                canvas.create_line(x, 0, x, height / 3, fill="#262626", width=1)
            else:
                canvas.create_line(x, 0, x, height / 4, fill="#333333", width=1)

    def _draw_right_ruler(self):
        canvas = self.right_ruler
        canvas.delete("all")
        width = canvas.winfo_width()
        height = canvas.winfo_height()

        for y in range(0, height + 1, 4):
            if y % 40 == 0:
                start = width * 0.5
            elif y % 20 == 0:
                start = width * 0.66
            else:
                start = width * 0.75
            canvas.create_line(start, y, width, y, fill="#1A1A1A", width=1)

    # === IMAGE LOADING ===

    def _ask_image_path(self, title):
        patterns = " ".join(f"*{ext}" for ext in IMAGE_EXTS)
        return filedialog.askopenfilename(
            title=title,
            initialdir=self.app_config.display.data_dir,
            filetypes=[("Image files", patterns)]
        )

    def _load_reference(self):
        path = self._ask_image_path("Open Reference Image")
        if not path:
            return
        try:
            prepared = prepare_image(path, self.app_config)
        except GlassvisError as e:
            messagebox.showerror("Error", f"Failed to load image: {e}")
            return

        self.session.set_reference(prepared)
        self._ref_size = None
        self._show_file(prepared, self.ref_label, None)
        self.defect_info.config(text=f"Loaded reference: {os.path.basename(path)}", fg=self.FG_COLOR)

    def _load_captured(self, path=None):
        if path is None:
            path = self._ask_image_path("Open Captured Image")
        if not path:
            return
        try:
            prepared = prepare_image(path, self.app_config)
        except GlassvisError as e:
            messagebox.showerror("Error", f"Failed to load image: {e}")
            return

        self.session.set_captured(prepared)
        self._capt_size = None
        self._show_file(prepared, self.capt_label, None)
        self.defect_info.config(text=f"Loaded captured: {os.path.basename(path)}", fg=self.FG_COLOR)

    def _capture_from_camera(self):
        output_dir = os.path.join(self.app_config.display.data_dir, "captures")
        try:
            frame_path = capture_frame(self.app_config.camera, output_dir)
        except GlassvisError as e:
            messagebox.showerror("Camera Error", str(e))
            return
        self._load_captured(frame_path)

    # === DIFF ===

    def _run_diff(self):
        if not self.session.ready:
            messagebox.showwarning("Missing Image", "Please load a reference and a captured image first.")
            return
        if self._diff_running:
            return

        self.session.significance = int(self.significance_var.get())
        self.session.draw_bounding_box = bool(self.bounding_var.get())

        reference_path = self.session.reference_path
        captured_path = self.session.normalized_captured_path()
        significance = self.session.significance
        draw_bounding_box = self.session.draw_bounding_box

        self._diff_running = True
        self.defect_info.config(text="Running diff...", fg=self.FG_COLOR)

        def schedule(callback, value):
            self.after(0, callback, value)

        threading.Thread(
            target=run_diff_job,
            args=(schedule, self._on_diff_done, self._on_diff_failed,
                  reference_path, captured_path),
            kwargs={'significance': significance,
                    'draw_bounding_box': draw_bounding_box,
                    'config': self.app_config,
                    'verbose': False},
            daemon=True
        ).start()

    def _on_diff_done(self, result):
        self._diff_running = False
        self.session.record_diff(result['diff_path'], result)
        self._zoom_fit()

        self.defect_info.config(text=result['message'], fg=self.ERROR_COLOR)
        log_result(self.log_file, result)

    def _on_diff_failed(self, error):
        self._diff_running = False
        self.defect_info.config(text=f"Error: {error}", fg=self.ERROR_COLOR)
        messagebox.showerror("Diff Error", str(error))

    # === DISPLAY / ZOOM ===

    def _show_file(self, path, label, size):
        """Show an image file in a label, scaled to size (w, h) if given."""
        if not path or not os.path.exists(path):
            return None
        with Image.open(path) as img:
            # Markers carry alpha 0, show color channels only
            img = img.convert("RGB")
            if size is not None:
                w, h = max(size[0], 1), max(size[1], 1)
                img = img.resize((w, h), Image.LANCZOS)
            photo = ImageTk.PhotoImage(img)
            natural = img.size
        label.config(image=photo)
        label.image = photo
        return natural

    def _zoom(self, dw, dh):
        ref_size = self._ref_size or self._show_file(self.session.reference_path, self.ref_label, None)
        if ref_size:
            self._ref_size = (ref_size[0] + dw, ref_size[1] + dh)
            self._show_file(self.session.reference_path, self.ref_label, self._ref_size)

        capt_size = self._capt_size or self._show_file(self.session.active_path, self.capt_label, None)
        if capt_size:
            self._capt_size = (capt_size[0] + dw, capt_size[1] + dh)
            self._show_file(self.session.active_path, self.capt_label, self._capt_size)

    def _zoom_in(self):
        dw, dh = self.app_config.display.zoom_step
        self._zoom(dw, dh)

    def _zoom_out(self):
        dw, dh = self.app_config.display.zoom_step
        self._zoom(-dw, -dh)

    def _zoom_fit(self):
        self._ref_size = None
        self._capt_size = None
        self._show_file(self.session.reference_path, self.ref_label, None)
        self._show_file(self.session.active_path, self.capt_label, None)

    # === MISC HANDLERS ===

    def _on_image_click(self, event):
        self.position_info.config(text=f"Position: [ X = {event.x},  Y = {event.y} ]")

    def _toggle_settings(self):
        if self.settings_panel.winfo_ismapped():
            self.settings_panel.pack_forget()
        else:
            self.settings_panel.pack(side=tk.TOP, fill=tk.X, padx=5, after=self.header)

    def _toggle_fullscreen(self):
        self.attributes("-fullscreen", self.session.toggle_fullscreen())

    def _show_about(self):
        about_text = """
GLASSVIS
Version 1.0.0

Computer vision application for visual quality control.
Marks pixels that differ between a reference and a
captured image and reports the defect rate.
        """
        messagebox.showinfo("About", about_text.strip())

    def on_closing(self):
        self.destroy()


def main(config: GlassvisConfig = None):
    """Launch the GUI application."""
    app = InspectorApp(config)
    app.mainloop()


if __name__ == "__main__":
    main()
