"""
Seat inventory for a single vehicle.

Seats are numbered 1..N and stored as occupancy flags. Assignment policy is
a linear scan that always hands out the lowest-numbered free seat.
"""

from typing import Optional


class SeatInventory:
    def __init__(self, total_seats: int = 20):
        if total_seats <= 0:
            raise ValueError("total_seats must be positive")
        self.total_seats = total_seats
        self._seats = [False] * total_seats

    def is_valid_seat(self, seat_number: int) -> bool:
        return 1 <= seat_number <= self.total_seats

    def find_first_free(self) -> Optional[int]:
        """Lowest-numbered free seat, or None when every seat is taken."""
        for index, occupied in enumerate(self._seats):
            if not occupied:
                return index + 1
        return None

    def claim(self, seat_number: int) -> bool:
        """Mark a free seat occupied. Returns False for taken or out-of-range seats."""
        if not self.is_valid_seat(seat_number) or self._seats[seat_number - 1]:
            return False
        self._seats[seat_number - 1] = True
        return True

    def release(self, seat_number: int) -> bool:
        if not self.is_valid_seat(seat_number):
            return False
        self._seats[seat_number - 1] = False
        return True

    def is_occupied(self, seat_number: int) -> bool:
        return self.is_valid_seat(seat_number) and self._seats[seat_number - 1]

    def is_full(self) -> bool:
        return all(self._seats)

    def available_count(self) -> int:
        return sum(1 for occupied in self._seats if not occupied)

    def occupied_count(self) -> int:
        return sum(1 for occupied in self._seats if occupied)

    def flags(self) -> list[bool]:
        return list(self._seats)

    def load_flags(self, flags: list[bool]) -> None:
        if len(flags) != self.total_seats:
            raise ValueError(
                f"Expected {self.total_seats} seat flags, got {len(flags)}"
            )
        self._seats = [bool(flag) for flag in flags]

    def __repr__(self) -> str:
        return f"<SeatInventory(occupied={self.occupied_count()}/{self.total_seats})>"
