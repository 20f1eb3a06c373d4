"""
Adaptive Step Optimizer

This module contains the batch gradient-descent loop used to fit the weak
learner's parameter vector. The step size grows after every improving step
and shrinks after every rejected one; training converges once enough
consecutive committed steps change theta only by a small relative amount.
"""

import time
import warnings
import numpy as np
from typing import Dict, List, Optional

from .data_transforms import _check_int_at_least, _check_non_negative, _check_positive
from .error_function import WeightedErrorFunction
from .exceptions import InvalidConfiguration, NonConvergenceWarning
from .gradient_computer import GradientComputer

# Termination statuses
STATUS_CONVERGED = "converged"
STATUS_STATIONARY = "stationary"
STATUS_MAX_ITERATIONS = "max_iterations"
STATUS_MAX_TIME = "max_time"

ALPHA = 0.1
TAU = 0.01
GROWTH_FACTOR = 1.2
SHRINK_FACTOR = 0.5
PATIENCE = 10
MAX_ITERATIONS = 10000


class OptimizationResult:
    """
    Outcome of one ``AdaptiveStepOptimizer.optimize`` run.

    Attributes:
    -----------
    theta : np.ndarray
        Best parameter vector found (the last committed one)
    converged : bool
        False if the iteration or time budget ran out first
    status : str
        One of "converged", "stationary", "max_iterations", "max_time"
    n_iterations : int
        Loop iterations, committed and rejected
    n_commits : int
        Committed (strictly improving) steps
    error : float
        Weighted error at ``theta``
    initial_error : float
        Weighted error at the starting theta
    step_size : float
        Step size when the loop stopped
    elapsed : float
        Wall time in seconds
    history : list of dict
        One entry per committed step
    """

    def __init__(self, theta: np.ndarray, converged: bool, status: str, n_iterations: int,
                 n_commits: int, error: float, initial_error: float, step_size: float,
                 elapsed: float, history: List[Dict]):
        self.theta = theta
        self.converged = converged
        self.status = status
        self.n_iterations = n_iterations
        self.n_commits = n_commits
        self.error = error
        self.initial_error = initial_error
        self.step_size = step_size
        self.elapsed = elapsed
        self.history = history

    def to_dict(self) -> Dict:
        return {
            'theta': self.theta.tolist(),
            'converged': self.converged,
            'status': self.status,
            'n_iterations': self.n_iterations,
            'n_commits': self.n_commits,
            'error': self.error,
            'initial_error': self.initial_error,
            'step_size': self.step_size,
            'elapsed': self.elapsed,
        }

    def __repr__(self) -> str:
        return (f"OptimizationResult(status='{self.status}', n_iterations={self.n_iterations}, "
                f"n_commits={self.n_commits}, error={self.error:.6g})")


class AdaptiveStepOptimizer:
    """
    Batch gradient descent with an adaptive step size.

    Parameters:
    -----------
    error_function : WeightedErrorFunction
        Loss evaluated at current and candidate parameters
    gradient_computer : GradientComputer
        Supplies the unit-normalized gradient
    initial_step_size : float, default=0.1
        Starting step size alpha
    tolerance : float, default=0.01
        A committed step is "small" when ||delta|| < tolerance * ||theta||
    growth_factor : float, default=1.2
        Step size multiplier after a committed step
    shrink_factor : float, default=0.5
        Step size multiplier after a rejected step
    patience : int, default=10
        Consecutive small committed steps required for convergence
    max_iterations : int, default=10000
        Loop iteration budget
    max_seconds : float, optional
        Wall-time budget
    verbose : bool, default=False
        Print one line per committed step
    """

    def __init__(self,
                 error_function: WeightedErrorFunction,
                 gradient_computer: GradientComputer,
                 initial_step_size: float = ALPHA,
                 tolerance: float = TAU,
                 growth_factor: float = GROWTH_FACTOR,
                 shrink_factor: float = SHRINK_FACTOR,
                 patience: int = PATIENCE,
                 max_iterations: int = MAX_ITERATIONS,
                 max_seconds: Optional[float] = None,
                 verbose: bool = False):
        validate_optimizer_params(initial_step_size, tolerance, growth_factor, shrink_factor,
                                  patience, max_iterations, max_seconds)
        self.error_function = error_function
        self.gradient_computer = gradient_computer
        self.initial_step_size = initial_step_size
        self.tolerance = tolerance
        self.growth_factor = growth_factor
        self.shrink_factor = shrink_factor
        self.patience = patience
        self.max_iterations = max_iterations
        self.max_seconds = max_seconds
        self.verbose = verbose

    def optimize(self, theta: np.ndarray) -> OptimizationResult:
        """
        Run gradient descent starting from ``theta``.

        The input array is not modified; the fitted parameters are returned
        in the result.

        Parameters:
        -----------
        theta : array-like, shape=(basis_length,)
            Starting parameter vector

        Returns:
        --------
        result : OptimizationResult
        """
        theta = np.array(theta, dtype=np.float64, copy=True)
        alpha = self.initial_step_size
        start_time = time.perf_counter()

        error = self.error_function.error(theta)
        initial_error = error
        gradient = self.gradient_computer.compute_gradient(theta)

        small_change_count = 0
        n_iterations = 0
        n_commits = 0
        history = []
        status = None

        while status is None:
            # A zero gradient marks a stationary point
            if not np.any(gradient):
                status = STATUS_STATIONARY
                break
            if n_iterations >= self.max_iterations:
                status = STATUS_MAX_ITERATIONS
                break
            if self.max_seconds is not None and time.perf_counter() - start_time >= self.max_seconds:
                status = STATUS_MAX_TIME
                break

            n_iterations += 1
            delta = alpha * gradient
            candidate = theta - delta

            # Step too small to move theta in floating point
            if np.array_equal(candidate, theta):
                status = STATUS_STATIONARY
                break

            candidate_error = self.error_function.error(candidate)
            if candidate_error < error:
                theta = candidate
                theta_change = float(np.sqrt(np.sum(delta * delta)))
                theta_norm = float(np.sqrt(np.sum(theta * theta)))
                if theta_change < self.tolerance * theta_norm:
                    small_change_count += 1
                else:
                    small_change_count = 0

                error = candidate_error
                gradient = self.gradient_computer.compute_gradient(theta)
                n_commits += 1

                history.append({
                    'iteration': n_iterations,
                    'error': error,
                    'step_size': alpha,
                    'theta_change': theta_change,
                    'theta_norm': theta_norm,
                    'small_change_count': small_change_count,
                })
                if self.verbose:
                    print(f"Iter {n_iterations}: error={error:.6g}, step={alpha:.4g}, "
                          f"change={theta_change:.4g}, small_changes={small_change_count}, "
                          f"theta={np.array2string(theta, precision=4)}")

                alpha *= self.growth_factor
                if small_change_count >= self.patience:
                    status = STATUS_CONVERGED
            else:
                alpha *= self.shrink_factor

        converged = status in (STATUS_CONVERGED, STATUS_STATIONARY)
        elapsed = time.perf_counter() - start_time

        if not converged:
            warnings.warn(
                f"Gradient descent stopped ({status}) after {n_iterations} iterations "
                f"without converging; returning best theta found (error={error:.6g})",
                NonConvergenceWarning
            )

        return OptimizationResult(
            theta=theta,
            converged=converged,
            status=status,
            n_iterations=n_iterations,
            n_commits=n_commits,
            error=error,
            initial_error=initial_error,
            step_size=alpha,
            elapsed=elapsed,
            history=history
        )


def validate_optimizer_params(initial_step_size: float, tolerance: float, growth_factor: float,
                              shrink_factor: float, patience: int, max_iterations: int,
                              max_seconds: Optional[float]) -> None:
    """
    Validate optimizer hyper-parameters

    Raises:
    -------
    InvalidConfiguration
        If any parameter is outside its valid range
    """
    _check_positive("initial_step_size", initial_step_size)
    _check_non_negative("tolerance", tolerance)
    if growth_factor is None or not np.isfinite(growth_factor) or growth_factor <= 1:
        raise InvalidConfiguration(f"growth_factor must be > 1, got {growth_factor}")
    if shrink_factor is None or not np.isfinite(shrink_factor) or not 0 < shrink_factor < 1:
        raise InvalidConfiguration(f"shrink_factor must be in (0, 1), got {shrink_factor}")
    _check_int_at_least("patience", patience, 1)
    _check_int_at_least("max_iterations", max_iterations, 1)
    if max_seconds is not None:
        _check_positive("max_seconds", max_seconds)
