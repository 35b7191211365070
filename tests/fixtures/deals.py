# tests/fixtures/deals.py

from dealscore.domain.deal import DealInput


def flip_deal() -> DealInput:
    """
    250k purchase, 350k ARV, 40k repairs.
    Over the 70% / 80% offer limits, ~71% of ARV, thin ~11% flip ROI.
    """
    return DealInput(price=250_000.0, arv=350_000.0, repairs=40_000.0, address="12 Flip Ln")


def rental_deal() -> DealInput:
    """
    200k purchase renting at 2k/mo.
    Exactly meets the 1% rule, 7.2% cap, ~$202/mo cash flow, ~4.8% CoC.
    """
    return DealInput(price=200_000.0, rent=2000.0)


def dream_deal() -> DealInput:
    """
    Every metric good; raw score is 130 before clamping.
    """
    return DealInput(price=100_000.0, arv=200_000.0, repairs=20_000.0, rent=2000.0)


def money_pit() -> DealInput:
    """
    Every metric bad; raw score is -10 before clamping.
    """
    return DealInput(price=400_000.0, arv=380_000.0, repairs=60_000.0, rent=1400.0)
