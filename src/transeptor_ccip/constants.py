"""Constants and the built-in CCIP testnet table."""

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# First 4 bytes of keccak256("CCIP EVMExtraArgsV1")
EVM_EXTRA_ARGS_V1_SIGNATURE = "CCIP EVMExtraArgsV1"
EVM_EXTRA_ARGS_V1_TAG = bytes.fromhex("97a657c9")

DEFAULT_GAS_LIMIT = 200_000
DEFAULT_SOURCE_CHAIN = "ethereumSepolia"

# ERC-4337 EntryPoint v0.6, deployed at the same address on every network
DEFAULT_ENTRY_POINT = "0x5FF137D4b0FDCD49DcA30c7CF57E578a026d2789"

# https://docs.chain.link/ccip/supported-networks
CCIP_NETWORKS: dict[str, dict[str, object]] = {
    "ethereumSepolia": {
        "chain_id": 11155111,
        "router": "0x0BF3dE8c5D3e8A2B34D2BEeB17ABfCeBaf363A59",
        "chain_selector": 16015286601757825753,
        "link_token": "0x779877A7B0D9E8603169DdbD7836e478b4624789",
        "fee_tokens": [
            "0x779877A7B0D9E8603169DdbD7836e478b4624789",
            "0x097D90c9d3E0B50Ca60e1ae45F6A81010f9FB534",
        ],
    },
    "polygonMumbai": {
        "chain_id": 80001,
        "router": "0x1035CabC275068e0F4b745A29CEDf38E13aF41b1",
        "chain_selector": 12532609583862916517,
        "link_token": "0x326C977E6efc84E512bB9C30f76E30c160eD06FB",
        "fee_tokens": [
            "0x326C977E6efc84E512bB9C30f76E30c160eD06FB",
            "0x9c3C9283D3e44854697Cd22D3Faa240Cfb032889",
        ],
    },
    "optimismGoerli": {
        "chain_id": 420,
        "router": "0xcc5a0B910D9E9504A7561934bed294c51285a78D",
        "chain_selector": 2664363617261496610,
        "link_token": "0xdc2CC710e42857672E7907CF474a69B63B93089f",
        "fee_tokens": [
            "0xdc2CC710e42857672E7907CF474a69B63B93089f",
            "0x4200000000000000000000000000000000000006",
        ],
    },
    "avalancheFuji": {
        "chain_id": 43113,
        "router": "0xF694E193200268f9a4868e4Aa017A0118C9a8177",
        "chain_selector": 14767482510784806043,
        "link_token": "0x0b9d5D9136855f6FEc3c0993feE6E9CE8a297846",
        "fee_tokens": [
            "0x0b9d5D9136855f6FEc3c0993feE6E9CE8a297846",
            "0xd00ae08403B9bbb9124bB305C09058E32C39A48c",
        ],
    },
    "arbitrumTestnet": {
        "chain_id": 421613,
        "router": "0x88E492127709447A5ABEFdaB8788a15B4567589E",
        "chain_selector": 6101244977088475029,
        "link_token": "0xd14838A68E8AFBAdE5efb411d5871ea0011AFd28",
        "fee_tokens": [
            "0xd14838A68E8AFBAdE5efb411d5871ea0011AFd28",
            "0x32d5D5978905d9c6c2D4C417F0E06Fe768a4FB5a",
        ],
    },
    "baseGoerli": {
        "chain_id": 84531,
        "router": "0xA8C0c11bf64AF62CDCA6f93D3769B88BdD7cb93D",
        "chain_selector": 5790810961207155433,
        "link_token": "0xD886E2286Fd1073df82462ea1822119600Af80b6",
        "fee_tokens": [
            "0xD886E2286Fd1073df82462ea1822119600Af80b6",
            "0x4200000000000000000000000000000000000006",
        ],
    },
    "bnbTestnet": {
        "chain_id": 97,
        "router": "0xE1053aE1857476f36A3C62580FF9b016E8EE8F6f",
        "chain_selector": 13264668187771770619,
        "link_token": "0x84b9B910527Ad5C03A9Ca831909E21e236EA7b06",
        "fee_tokens": [
            "0x84b9B910527Ad5C03A9Ca831909E21e236EA7b06",
            "0xae13d989daC2f0dEbFf460aC112a837C89BAa7cd",
        ],
    },
}


def rpc_env_var(network: str) -> str:
    """Return the environment variable holding the RPC URL of ``network``.

    ``ethereumSepolia`` -> ``ETHEREUM_SEPOLIA_RPC_URL``
    """
    snake = "".join(f"_{char}" if char.isupper() else char for char in network)
    return f"{snake.upper().lstrip('_')}_RPC_URL"
