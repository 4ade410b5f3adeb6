"""Amp and cabinet model tables for the Pocket POD.

The list index is the wire value (CC 12 for amps, CC 71 for cabinets and the
matching patch dump bytes).  Never reorder these lists.
"""
from __future__ import annotations

AMP_MODELS: tuple[str, ...] = (
    "Tube Preamp",           # 0
    "Line 6 Clean",          # 1
    "Line 6 Crunch",         # 2
    "Line 6 Drive",          # 3
    "Line 6 Layer",          # 4
    "Small Tweed",           # 5
    "Tweed Blues",           # 6
    "Black Panel",           # 7
    "Modern Class A",        # 8
    "Brit Class A",          # 9
    "Brit Blues",            # 10
    "Brit Classic",          # 11
    "Brit Hi Gain",          # 12
    "Treadplate",            # 13
    "Modern Hi Gain",        # 14
    "Fuzz Box",              # 15
    "Jazz Clean",            # 16
    "Boutique #1",           # 17
    "Boutique #2",           # 18
    "Brit Class A #2",       # 19
    "Brit Class A #3",       # 20
    "Small Tweed #2",        # 21
    "Black Panel #2",        # 22
    "Boutique #3",           # 23
    "California Crunch #1",  # 24
    "California Crunch #2",  # 25
    "Treadplate #2",         # 26
    "Modern Hi Gain #2",     # 27
    "Line 6 Twang",          # 28
    "Line 6 Crunch #2",      # 29
    "Line 6 Blues",          # 30
    "Line 6 INSANE",         # 31
)

CAB_MODELS: tuple[str, ...] = (
    "1x8 '60 Fender Tweed Champ",                  # 0
    "1x12 '52 Fender Tweed Deluxe",                # 1
    "1x12 '60 Vox AC15",                           # 2
    "1x12 '64 Fender Blackface Deluxe",            # 3
    "1x12 '98 Line 6 Flextone",                    # 4
    "2x12 '65 Fender Blackface Twin",              # 5
    "2x12 '67 VOX AC30",                           # 6
    "2x12 '95 Matchless Chieftain",                # 7
    "2x12 '98 Pod Custom 2x12",                    # 8
    "4x10 '59 Fender Bassman",                     # 9
    "4x10 '98 Pod Custom 4x10",                    # 10
    "4x12 '96 Marshall w/ V30s",                   # 11
    "4x12 '78 Marshall w/ 70s",                    # 12
    "4x12 '97 Marshall Basketweave w/ Greenbacks", # 13
    "4x12 '98 Pod Custom 4x12",                    # 14
    "No Cabinet",                                  # 15
)

assert len(AMP_MODELS) == 32
assert len(CAB_MODELS) == 16


def amp_model_name(index: int) -> str | None:
    """Return the amp model name for *index*, or None if out of range."""
    if 0 <= index < len(AMP_MODELS):
        return AMP_MODELS[index]
    return None


def cab_model_name(index: int) -> str | None:
    if 0 <= index < len(CAB_MODELS):
        return CAB_MODELS[index]
    return None
