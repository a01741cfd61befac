"""
Bot services: state stores, turn handling and recognizers.

Import from the submodules directly (``concierge.services.bot`` etc.); this
package does not re-export them because the dialogs import from here too.
"""
