"""
macOS integration helpers for Gemini Translation.
"""
import sys
import logging


def hide_dock_icon():
    """Run as a menu bar (accessory) app so no Dock icon is shown."""
    if sys.platform != 'darwin':
        return

    from AppKit import NSApplication, NSApplicationActivationPolicyAccessory

    NSApplication.sharedApplication().setActivationPolicy_(NSApplicationActivationPolicyAccessory)
    logging.info("Dock icon hidden")
