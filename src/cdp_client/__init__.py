"""
CDP Python SDK

Client for the Coinbase Developer Platform API: JWT request
authentication, waiting on asynchronous operations, and draining
paginated collections.
"""

# Configuration and transport
from .config import ClientConfig
from .transport import ApiClient
from .auth import Authenticator, Credential, RequestDescriptor, SignedToken, authenticate_request

# Core mechanisms
from .pagination import Page, PaginationOptions, fetch_all, iter_pages
from .operations import (
    AsyncOperation, WaitOptions, wait_for_terminal, merge_sub_items,
    Transaction, SponsoredSend, Transfer, Trade, StakingOperation, FundOperation,
    TransactionStatus, TransferStatus, StakingOperationStatus, FundOperationStatus,
    StakeAction, StakeOptionsMode,
)
from .signers import TransactionSigner, EthAccountSigner

# Errors
from .runtime.errors import *

from .constants import SDK_VERSION

__version__ = SDK_VERSION

wait = wait_for_terminal
