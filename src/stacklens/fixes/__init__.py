from stacklens.fixes.quickfix import generate_fixes, insert_isolation_fix, remove_declaration_fix

__all__ = ["generate_fixes", "insert_isolation_fix", "remove_declaration_fix"]
