"""Account registry and wallet use cases"""
from .register_account import RegisterAccount
from .get_balance import GetBalance
from .top_up_balance import TopUpBalance
from .dtos import (
    RegisterAccountCommandDTO,
    TopUpCommandDTO,
    AccountResponseDTO,
    BalanceResponseDTO,
)

__all__ = [
    "RegisterAccount",
    "GetBalance",
    "TopUpBalance",
    "RegisterAccountCommandDTO",
    "TopUpCommandDTO",
    "AccountResponseDTO",
    "BalanceResponseDTO",
]
