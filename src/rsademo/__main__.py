"""The Command Line Interface for the demonstration, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface) that generates the INTERACTIVE part
on-the-fly based on the components missing from the CLI invocation, including the option that none are given.

Typical usage example:

    rsademo
    OR
    python -m rsademo demo --word HELLO --keysize 512
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import sys
import typing

import rsademo
from rsademo import rsa
from rsademo.keygen import DEFAULT_PRIME_ROUNDS


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in RSA Demo.",
            choices=["demo", "keygen", "prime", "check"],
        ),
    "demo":
        HelpData("Encrypt and decrypt a word, narrating every step."),
    "keygen":
        HelpData("Key pair generation utility."),
    "prime":
        HelpData("Probable prime generation utility."),
    "check":
        HelpData("Miller-Rabin primality check utility."),
    "word":
        HelpData(
            description="The word to encrypt.",
            format=str,
            default="HELLO",
        ),
    "encoding":
        HelpData(description="Word encoding.", choices=["utf-8", "utf-16", "ascii"], advanced=True, default="utf-8"),
    "keysize":
        HelpData(
            description="Key size (in bits).",
            choices=["64", "128", "256", "512", "1024", "2048"],
            default="512",
        ),
    "bits":
        HelpData(
            description="Prime size (in bits).",
            format=int,
        ),
    "number":
        HelpData(
            description="The number to test for primality.",
            format=int,
        ),
    "rounds":
        HelpData(
            description="Number of Miller-Rabin rounds.",
            format=int,
            advanced=True,
            default=DEFAULT_PRIME_ROUNDS,
        ),
}

CONCEPTS = (
    "RSA is an asymmetric algorithm: the public key encrypts, the private key decrypts.",
    "Its security rests on how hard it is to factor large numbers.",
    "Each byte is turned into a number and processed on its own, with no padding.",
    "Real keys must be at least 2048 bits long!",
)

needs = {
    "demo": ("word", "keysize", "encoding"),
    "keygen": ("keysize",),
    "prime": ("bits", "rounds"),
    "check": ("number", "rounds"),
}

keysize = argparse.ArgumentParser(add_help=False)
keysize.add_argument("--keysize", "-k", choices=help_dict["keysize"].choices, help=help_dict["keysize"].description)
rounds = argparse.ArgumentParser(add_help=False)
rounds.add_argument("--rounds", "-r", type=help_dict["rounds"].format, help=help_dict["rounds"].description)
corep = argparse.ArgumentParser(prog="rsademo")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {rsademo.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

demo = commands.add_parser("demo", parents=[keysize], help=help_dict["demo"].description)
demo.add_argument("--word", "-w", type=help_dict["word"].format, help=help_dict["word"].description)
demo.add_argument("--encoding", "-e", choices=help_dict["encoding"].choices, help=help_dict["encoding"].description)
keygen = commands.add_parser("keygen", parents=[keysize], help=help_dict["keygen"].description)
prime = commands.add_parser("prime", parents=[rounds], help=help_dict["prime"].description)
prime.add_argument("--bits", "-b", type=help_dict["bits"].format, help=help_dict["bits"].description)
check = commands.add_parser("check", parents=[rounds], help=help_dict["check"].description)
check.add_argument("--number", "-N", type=help_dict["number"].format, help=help_dict["number"].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default is not None:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr(f"Description: {helper_data.description}")
    choices = helper_data.choices
    vald = set(choices)
    for choice in choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in vald:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr(f"Description: {helper_data.description}")
    if helper_data.default is not None:
        prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ").strip()
        if not ch and helper_data.default is not None:
            return helper_data.default
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            return cls(ch)
        except ValueError:
            prntr(f"We could not convert your value to {cls.__name__}.")


def narrate(enabled: bool) -> typing.Callable[[], None]:
    """Route key generation steps to stdout, if narrating.

    The package logger stops propagating while narrating, so no step is printed twice.

    Returns:
        A callable restoring the logger to its previous state.
    """
    if not enabled:
        return lambda: None
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("   %(message)s"))
    logger = logging.getLogger("rsademo")
    level, propagate = logger.level, logger.propagate
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False

    def restore():
        logger.removeHandler(handler)
        logger.setLevel(level)
        logger.propagate = propagate

    return restore


def run_demo(word: str, size: int, encoding: str, pspr: typing.Callable) -> bool:
    """Runs the narrated encrypt/decrypt round for one word.

    Returns:
        True if the decrypted word matches the original.
    """
    if not word:
        pspr("Empty word! Using default example: 'HELLO'")
        word = "HELLO"
    values = rsa.text_to_values(word, encoding)
    pspr(f"Word to encrypt: \"{word}\"\n")
    pspr(f"Generating {size}-bit RSA keys...")
    rpk = rsa.RSAPrivKey.generate(size)
    pspr("Keys generated!\n")
    pspr("Public key (n, e):")
    pspr(f"   n: {rpk.mod} ({rpk.mod.bit_length()} bits)")
    pspr(f"   e: {rpk.pub.expo}")
    pspr("Private key (n, d):")
    pspr(f"   d: {rpk.expo} ({rpk.expo.bit_length()} bits)\n")

    pspr("Encrypting each byte on its own...")
    ciphertext = rpk.pub.encrypt(bytes(values))
    for pos, (value, cval) in enumerate(zip(values, ciphertext), 1):
        pspr(f"   {pos}: {chr(value)!r} ({value}) -> {cval}")
    pspr("Ciphertext:")
    for cval in ciphertext:
        print(cval)

    pspr("\nDecrypting...")
    decrypted = rpk.decrypt(ciphertext)
    for cval, value in zip(ciphertext, decrypted):
        pspr(f"   {cval} -> {value} ({chr(value)!r})")
    clear = rsa.values_to_text(decrypted, encoding)
    pspr("Cleartext:")
    print(clear)
    pspr(f"\nOriginal:  \"{word}\"")
    pspr(f"Decrypted: \"{clear}\"")
    pspr("\nImportant concepts:")
    for concept in CONCEPTS:
        pspr(f"   * {concept}")
    return clear == word


def main():
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args()
    pstatus = (args.non_interactive, args.advanced)

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to RSA Demo!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus)
    for reqs in needs[args.subcommand]:
        if getattr(args, reqs, None) is None:
            if help_dict[reqs].choices is not None:
                res = choice_handler(reqs, pstatus)
            else:
                res = input_handler(reqs, pstatus)
            setattr(args, reqs, res)
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    pspr("\nInput Complete! Executing...")
    restore = narrate(not pstatus[0])
    try:
        match args.subcommand:
            case "demo":
                if run_demo(args.word.strip(), int(args.keysize), args.encoding, pspr):
                    pspr("Success! The messages are identical!")
                else:
                    print("Decrypted message differs from the original!")
                    sys.exit(1)
            case "keygen":
                kp = rsademo.generate_keypair(int(args.keysize))
                pspr("Key pair:")
                print(f"n = {kp.modulus}")
                print(f"e = {kp.public_exponent}")
                print(f"d = {kp.private_exponent}")
            case "prime":
                pspr(f"Probable {args.bits}-bit prime:")
                print(rsademo.generate_prime(args.bits, rounds=args.rounds))
            case "check":
                if rsademo.is_probable_prime(args.number, args.rounds):
                    print(f"{args.number} is a probable prime.")
                else:
                    print(f"{args.number} is composite.")
                    sys.exit(1)
    except ValueError as err:
        print(f"Error: {err}")
        sys.exit(2)
    finally:
        restore()
    pspr("Thank you for using RSA Demo!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
