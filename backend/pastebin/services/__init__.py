# Services package init
"""
Pastebin Backend — Services Layer
===================================

Service Inventory:
    - PasteService: create / read / list / delete against the pastes table
    - paste_rules:  pure rules (ids, expiry, burn, previews) shared with the
                    client-local backend in pastebin.ui
"""
