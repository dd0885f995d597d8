"""
Factory for creating short code generation strategies.
"""

from enum import Enum
from shortcode_app.services.short_code_strategies import (
    ShortCodeStrategy,
    RandomShortCodeStrategy,
    SecureShortCodeStrategy
)
from shortcode_app.config import Settings, settings as default_settings


class ShortCodeStrategyType(Enum):
    """Available short code generation strategies"""
    RANDOM = "random"
    SECURE = "secure"


class ShortCodeFactory:
    """Factory for creating short code generation strategies"""

    @classmethod
    def create_strategy(
        cls,
        strategy_type: ShortCodeStrategyType = None,
        config: Settings = None
    ) -> ShortCodeStrategy:
        """
        Create a short code generation strategy.

        Args:
            strategy_type: Type of strategy to create.
                          If None, uses value from settings.
            config: Settings to read from (defaults to the global settings)

        Returns:
            A ShortCodeStrategy producing `short_code_length` characters

        Raises:
            ValueError: If strategy_type is unknown
        """
        config = config or default_settings

        # Use default from settings if not specified
        if strategy_type is None:
            strategy_type = ShortCodeStrategyType(config.short_code_strategy)

        if strategy_type == ShortCodeStrategyType.RANDOM:
            return RandomShortCodeStrategy(length=config.short_code_length)
        elif strategy_type == ShortCodeStrategyType.SECURE:
            return SecureShortCodeStrategy(length=config.short_code_length)

        raise ValueError(f"Unknown strategy type: {strategy_type}")
