"""Gradio user interface for the Law Meme Generator.

- models / state: per-session state and the generation state machine
- orchestrator: topic → descriptions → images cycle
- formatting / media: display text, filenames, and download payloads
- components / handlers / app: Gradio layout and event wiring
"""
