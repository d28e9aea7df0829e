"""Current price snapshot database model.

One row per ticker, refreshed manually and overwritten in place.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, Float, String

from wheeltracker.server.database.session import Base


class CurrentPrice(Base):
    """Per-ticker price snapshot model.

    Attributes:
        ticker: Stock ticker symbol (primary key)
        stock_price: Last entered share price
        option_price: Last entered option price per share
        strike: Strike of the option being tracked
        expiration: Expiration of the option being tracked (YYYY-MM-DD)
        option_type: "PUT" or "CALL"
        updated_at: When the snapshot was last written
    """

    __tablename__ = "current_prices"

    ticker = Column(String, primary_key=True)
    stock_price = Column(Float, nullable=True)
    option_price = Column(Float, nullable=True)
    strike = Column(Float, nullable=True)
    expiration = Column(String, nullable=True)
    option_type = Column(String, nullable=True)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<CurrentPrice(ticker={self.ticker}, stock_price={self.stock_price}, "
            f"option_price={self.option_price})>"
        )
