class VisibilityRules:
    """
    Central logic for which directory entries a traversal skips.
    """

    # Dotfiles (.git, .DS_Store, .gitignore ...) are hidden
    HIDDEN_PREFIX = "."

    @classmethod
    def is_hidden(cls, name: str) -> bool:
        return name.startswith(cls.HIDDEN_PREFIX)

    @classmethod
    def should_skip(cls, name: str, include_hidden: bool) -> bool:
        """
        Returns True if the entry should not be yielded or descended into.
        """
        if include_hidden:
            return False
        return cls.is_hidden(name)
