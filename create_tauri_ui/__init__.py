"""Scaffold Tauri desktop apps from bundled Vite, Next.js and SvelteKit templates."""

__version__ = "0.1.0"
